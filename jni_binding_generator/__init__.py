"""
JNI Bindings Generator - Generate C glue code for JNI from class descriptors
"""

from .generator import JNIBindingsGenerator
from .type_mapper import TypeMapper, SignatureError, parse_type, parse_method_signature
from .code_generators import CodeGenerator
from .emission import DuplicateSymbolError, EmissionBuffers, OutputBuilder
from .config import BindingConfig, BindingTarget, parse_config_file
from .provider import DescriptorProvider, DescriptorNotFoundError
from .naming import InvalidClassNameError

__version__ = "0.1.0"

__all__ = [
    "JNIBindingsGenerator",
    "TypeMapper",
    "SignatureError",
    "parse_type",
    "parse_method_signature",
    "CodeGenerator",
    "DuplicateSymbolError",
    "EmissionBuffers",
    "OutputBuilder",
    "BindingConfig",
    "BindingTarget",
    "parse_config_file",
    "DescriptorProvider",
    "DescriptorNotFoundError",
    "InvalidClassNameError",
]
