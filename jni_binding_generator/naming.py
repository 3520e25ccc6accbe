"""
Symbol naming and member selection for generated bindings

Every generated symbol embeds the short name of its class. Names can still
coincide, for two classes sharing a short name or a member whose name looks
like an overload suffix; the emission buffers reject such names.
Overloads are told apart by an ordinal suffix that is assigned after
filtering, in signature order, so the output does not depend on the order
members appear in a descriptor.
"""

from dataclasses import dataclass

from .config import BindingTarget
from .constants import ENUM_REFLECTION_METHODS
from .descriptors import ClassDescriptor, FieldDescriptor, MethodDescriptor


class InvalidClassNameError(ValueError):
    """Raised for a class name that has no simple name part"""


def simple_class_name(class_name: str) -> str:
    """Part of a fully-qualified class name after the last '.' or '/'"""
    if not class_name or class_name.endswith((".", "/")):
        raise InvalidClassNameError(f"Invalid class name {class_name!r}")
    idx = max(class_name.rfind("/"), class_name.rfind("."))
    # idx == -1 means the default package
    return class_name[idx + 1:]


def native_class_name(class_name: str) -> str:
    """Class name in the '/'-separated form FindClass expects"""
    return class_name.replace(".", "/")


@dataclass(frozen=True)
class BoundMethod:
    """A selected method together with its overload ordinal"""
    method: MethodDescriptor
    ordinal: int

    @property
    def suffix(self) -> str:
        # The first overload keeps the bare name
        return f"_{self.ordinal}" if self.ordinal > 0 else ""


class SymbolNamer:
    """Builds handle and function names for one class"""

    def __init__(self, class_name: str):
        self.class_name = class_name
        self.short_name = simple_class_name(class_name)
        self.native_name = native_class_name(class_name)

    @property
    def class_handle(self) -> str:
        return self.short_name

    @property
    def enum_values_array(self) -> str:
        return f"{self.short_name}_enum_values"

    def field_handle(self, field_name: str) -> str:
        return f"{self.short_name}_{field_name}"

    def constructor_handle(self, ordinal: int) -> str:
        return f"{self.short_name}_C_{ordinal}"

    def method_handle(self, method_name: str, ordinal: int) -> str:
        return f"{self.short_name}_M_{method_name}_{ordinal}"

    def exception_constructor_handle(self, ordinal: int) -> str:
        return f"{self.short_name}_EC_{ordinal}"

    def symbol(self, prefix: str, member: str | None = None, suffix: str = "") -> str:
        """Public function name: ``<prefix>_<Class>[_<member>][_<ordinal>]``"""
        name = f"{prefix}_{self.short_name}"
        if member:
            name += f"_{member}"
        return name + suffix


def _visible(member, target: BindingTarget) -> bool:
    return member.is_public or not target.only_public


def select_fields(descriptor: ClassDescriptor, target: BindingTarget) -> list[FieldDescriptor]:
    """Fields to bind, sorted by name

    Filters match the plain field name.
    """
    selected = [
        f for f in descriptor.fields
        if not f.is_synthetic and _visible(f, target) and not target.excludes(f.name)
    ]
    return sorted(selected, key=lambda f: f.name)


def _method_filtered(method: MethodDescriptor, target: BindingTarget) -> bool:
    if target.excludes(method.name + method.signature):
        return True
    # Constructors may also be filtered by their bare signature
    return method.is_constructor and target.excludes(method.signature)


def select_methods(descriptor: ClassDescriptor, target: BindingTarget) -> list[BoundMethod]:
    """Methods and constructors to bind, ordered by name then signature

    Ordinals count per method name, constructors forming their own bucket.
    """
    selected = {}
    for method in descriptor.methods:
        if method.is_synthetic or method.is_static_initializer:
            continue
        if descriptor.is_enum and method.name in ENUM_REFLECTION_METHODS:
            continue
        if not _visible(method, target) or _method_filtered(method, target):
            continue
        selected[(method.name, method.signature)] = method

    counters = {}
    bound = []
    for key in sorted(selected):
        name = key[0]
        counters[name] = counters.get(name, -1) + 1
        bound.append(BoundMethod(selected[key], counters[name]))
    return bound


def select_exception_constructors(descriptor: ClassDescriptor, target: BindingTarget) -> list[BoundMethod]:
    """Instance constructors of an exception class, ordered by signature"""
    selected = {}
    for method in descriptor.methods:
        if not method.is_constructor or method.is_static or method.is_synthetic:
            continue
        if not _visible(method, target) or _method_filtered(method, target):
            continue
        selected[method.signature] = method

    return [BoundMethod(selected[sig], ordinal) for ordinal, sig in enumerate(sorted(selected))]
