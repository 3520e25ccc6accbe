"""
Loading of class descriptors from descriptor files on disk
"""

import json
import sys
from pathlib import Path

from .descriptors import ClassDescriptor, DescriptorFormatError


class DescriptorNotFoundError(LookupError):
    """Raised when a requested class is found neither in the classes directory nor the classpath"""


def load_descriptor_file(path) -> list[ClassDescriptor]:
    """Load all class descriptors from one JSON file (an object or a list of objects)"""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DescriptorFormatError(f"Invalid descriptor file {path}: {e}") from e

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise DescriptorFormatError(f"Descriptor file {path} must contain an object or a list")

    return [ClassDescriptor.from_dict(item) for item in data]


class DescriptorProvider:
    """Resolves class names to descriptors

    Descriptors of the project's own classes are collected from every
    ``*.json`` file below ``classes_dir``. Classes not found there are looked
    up in the ``classpath`` directories as ``pkg/Name.json``.
    """

    def __init__(self, classes_dir=None, classpath=None):
        self.classes_dir = Path(classes_dir) if classes_dir else None
        self.classpath = [Path(p) for p in (classpath or [])]

    def get_classes(self, needed) -> dict[str, ClassDescriptor]:
        """Return descriptors for all names in ``needed``, keyed by class name"""
        needed = set(needed)
        classes = {}

        if self.classes_dir is not None:
            if not self.classes_dir.is_dir():
                print(f"Warning: Classes directory not found: {self.classes_dir}", file=sys.stderr)
            else:
                # Sorted so that a class described twice resolves the same way every run
                for descriptor_file in sorted(self.classes_dir.rglob("*.json")):
                    for descriptor in load_descriptor_file(descriptor_file):
                        if descriptor.name in needed and descriptor.name not in classes:
                            classes[descriptor.name] = descriptor

        for name in sorted(needed - classes.keys()):
            classes[name] = self.get_class(name)

        return classes

    def get_class(self, name: str) -> ClassDescriptor:
        """Look up a single class on the classpath"""
        relative = Path(*name.split(".")).with_suffix(".json")
        for root in self.classpath:
            candidate = root / relative
            if not candidate.is_file():
                continue
            for descriptor in load_descriptor_file(candidate):
                if descriptor.name == name:
                    return descriptor

        raise DescriptorNotFoundError(f"No descriptor found for class {name}")
