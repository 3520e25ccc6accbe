"""
Pytest configuration and fixtures
"""

import json

import pytest

from jni_binding_generator.config import BindingTarget
from jni_binding_generator.descriptors import ClassDescriptor


POINT = {
    "name": "pkg.Point",
    "access": ["public", "super"],
    "fields": [
        {"name": "y", "signature": "I", "access": ["public"]},
        {"name": "x", "signature": "I", "access": ["public"]},
    ],
    "methods": [
        {"name": "<init>", "signature": "()V", "access": ["public"]},
    ],
}

MY_EXCEPTION = {
    "name": "pkg.MyException",
    "access": ["public", "super"],
    "fields": [],
    "methods": [
        {"name": "<init>", "signature": "(Ljava/lang/String;)V", "access": ["public"]},
        {"name": "<init>", "signature": "()V", "access": ["public"]},
    ],
}

HOLDER = {
    "name": "pkg.Holder",
    "access": ["public", "super"],
    "fields": [
        {"name": "data", "signature": "[B", "access": ["public", "static"]},
        {"name": "stamps", "signature": "[J", "access": ["public"]},
        {"name": "label", "signature": "Ljava/lang/String;", "access": ["public"]},
        {"name": "motd", "signature": "Ljava/lang/String;", "access": ["public", "static"]},
        {"name": "hidden", "signature": "Z", "access": ["private"]},
    ],
    "methods": [],
}

COLOR = {
    "name": "pkg.Color",
    "access": ["public", "final", "super", "enum"],
    "fields": [
        {"name": "RED", "signature": "Lpkg/Color;", "access": ["public", "static", "final", "enum"]},
        {"name": "GREEN", "signature": "Lpkg/Color;", "access": ["public", "static", "final", "enum"]},
        {"name": "BLUE", "signature": "Lpkg/Color;", "access": ["public", "static", "final", "enum"]},
        {"name": "$VALUES", "signature": "[Lpkg/Color;", "access": ["private", "static", "final", "synthetic"]},
    ],
    "methods": [
        {"name": "values", "signature": "()[Lpkg/Color;", "access": ["public", "static"]},
        {"name": "valueOf", "signature": "(Ljava/lang/String;)Lpkg/Color;", "access": ["public", "static"]},
        {"name": "<init>", "signature": "(Ljava/lang/String;I)V", "access": ["private"]},
        {"name": "<clinit>", "signature": "()V", "access": ["static"]},
    ],
}

CALC = {
    "name": "pkg.Calc",
    "access": ["public", "super"],
    "fields": [],
    "methods": [
        {"name": "add", "signature": "(JJ)J", "access": ["public"]},
        {"name": "add", "signature": "(II)I", "access": ["public"]},
        {"name": "add", "signature": "(DD)D", "access": ["public"]},
        {"name": "describe", "signature": "()Ljava/lang/String;", "access": ["public", "static"]},
        {"name": "reset", "signature": "()V", "access": ["public"]},
        {"name": "secret", "signature": "()I", "access": ["private"]},
        {"name": "lambda$reset$0", "signature": "()V", "access": ["private", "static", "synthetic"]},
        {"name": "<init>", "signature": "(I)V", "access": ["public"]},
        {"name": "<init>", "signature": "()V", "access": ["public"]},
    ],
}


@pytest.fixture
def descriptor_docs():
    """Descriptor documents of the sample classes keyed by class name"""
    return {doc["name"]: doc for doc in (POINT, MY_EXCEPTION, HOLDER, COLOR, CALC)}


@pytest.fixture
def descriptors(descriptor_docs):
    """Parsed descriptors of the sample classes keyed by class name"""
    return {name: ClassDescriptor.from_dict(doc) for name, doc in descriptor_docs.items()}


@pytest.fixture
def classes_dir(tmp_path, descriptor_docs):
    """A classes directory holding one descriptor file per sample class"""
    root = tmp_path / "classes"
    for name, doc in descriptor_docs.items():
        path = root.joinpath(*name.split(".")).with_suffix(".json")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(doc))
    return root


@pytest.fixture
def target():
    """Factory for binding targets"""
    def make(class_name, *filters, only_public=False):
        return BindingTarget(class_name, tuple(filters), only_public)
    return make
