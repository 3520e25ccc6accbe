"""
Class, field and method descriptors consumed by the generator
"""

from dataclasses import dataclass, field

from .constants import CONSTRUCTOR_NAME, STATIC_INITIALIZER_NAME


class DescriptorFormatError(ValueError):
    """Raised when a descriptor document is missing required entries"""


def _access_flags(data: dict, owner: str) -> frozenset[str]:
    access = data.get("access", [])
    if not isinstance(access, list):
        raise DescriptorFormatError(f"'access' of {owner} must be a list")
    if not all(isinstance(flag, str) for flag in access):
        raise DescriptorFormatError(f"'access' of {owner} must contain only strings")
    return frozenset(flag.strip().lower() for flag in access)


def _required(data: dict, key: str, owner: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise DescriptorFormatError(f"{owner} is missing '{key}'")
    return value


class _Modifiers:
    """Access flag predicates shared by all descriptors"""

    access: frozenset[str]

    @property
    def is_public(self) -> bool:
        return "public" in self.access

    @property
    def is_static(self) -> bool:
        return "static" in self.access

    @property
    def is_synthetic(self) -> bool:
        return "synthetic" in self.access

    @property
    def is_enum(self) -> bool:
        return "enum" in self.access


@dataclass(frozen=True)
class FieldDescriptor(_Modifiers):
    """A field of a class: name, type signature and access flags"""
    name: str
    signature: str
    access: frozenset[str] = frozenset()

    @classmethod
    def from_dict(cls, data: dict, owner: str) -> "FieldDescriptor":
        name = _required(data, "name", f"field of {owner}")
        return cls(
            name=name,
            signature=_required(data, "signature", f"field {owner}.{name}"),
            access=_access_flags(data, f"field {owner}.{name}"),
        )


@dataclass(frozen=True)
class MethodDescriptor(_Modifiers):
    """A method or constructor; constructors are named ``<init>``"""
    name: str
    signature: str
    access: frozenset[str] = frozenset()

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR_NAME

    @property
    def is_static_initializer(self) -> bool:
        return self.name == STATIC_INITIALIZER_NAME

    @classmethod
    def from_dict(cls, data: dict, owner: str) -> "MethodDescriptor":
        name = _required(data, "name", f"method of {owner}")
        return cls(
            name=name,
            signature=_required(data, "signature", f"method {owner}.{name}"),
            access=_access_flags(data, f"method {owner}.{name}"),
        )


@dataclass(frozen=True)
class ClassDescriptor(_Modifiers):
    """Metadata of one class as supplied by the descriptor provider"""
    name: str
    access: frozenset[str] = frozenset()
    fields: tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    methods: tuple[MethodDescriptor, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "ClassDescriptor":
        """Build a descriptor from its JSON document form"""
        if not isinstance(data, dict):
            raise DescriptorFormatError(f"Class descriptor must be an object, got {type(data).__name__}")
        name = _required(data, "name", "class descriptor")
        return cls(
            name=name,
            access=_access_flags(data, name),
            fields=tuple(FieldDescriptor.from_dict(f, name) for f in data.get("fields", [])),
            methods=tuple(MethodDescriptor.from_dict(m, name) for m in data.get("methods", [])),
        )
