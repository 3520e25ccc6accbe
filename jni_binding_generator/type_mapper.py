"""
Type mapping logic for converting JVM type signatures to JNI C types
"""

from dataclasses import dataclass

from .constants import (
    GENERIC_ARRAY_TYPE,
    GENERIC_OBJECT_TYPE,
    JNI_ACCESSOR_MAP,
    JNI_ARRAY_TYPE_MAP,
    JNI_OBJECT_TYPE_MAP,
    JNI_TYPE_MAP,
    JVALUE_MEMBER_MAP,
    OBJECT_ACCESSOR,
    PRIMITIVE_KINDS,
    STRING_TYPE,
    TypeKind,
)


class SignatureError(ValueError):
    """Raised for a type signature that is not a valid JVM descriptor"""


@dataclass(frozen=True)
class JavaType:
    """A parsed JVM field type

    ``element`` is set for arrays and ``class_name`` (dotted) for objects.
    """
    kind: TypeKind
    signature: str
    dimensions: int = 0
    element: "JavaType | None" = None
    class_name: str | None = None

    @property
    def is_primitive(self) -> bool:
        return self.kind in PRIMITIVE_KINDS


def _parse_at(signature: str, pos: int, allow_void: bool) -> tuple[JavaType, int]:
    """Parse one type starting at ``pos``; returns the type and the next position"""
    if pos >= len(signature):
        raise SignatureError(f"Unexpected end of signature: {signature!r}")

    code = signature[pos]

    if code == "[":
        dimensions = 0
        start = pos
        while pos < len(signature) and signature[pos] == "[":
            dimensions += 1
            pos += 1
        # void is not a legal element, but it only degrades the array to jarray
        element, pos = _parse_at(signature, pos, allow_void=True)
        return JavaType(TypeKind.ARRAY, signature[start:pos], dimensions, element), pos

    if code == "L":
        end = signature.find(";", pos)
        if end == -1 or end == pos + 1:
            raise SignatureError(f"Malformed object type in signature: {signature!r}")
        internal_name = signature[pos + 1:end]
        return JavaType(
            TypeKind.OBJECT,
            signature[pos:end + 1],
            class_name=internal_name.replace("/", "."),
        ), end + 1

    try:
        kind = TypeKind(code)
    except ValueError:
        raise SignatureError(f"Unknown type code {code!r} in signature: {signature!r}") from None

    if kind == TypeKind.VOID and not allow_void:
        raise SignatureError(f"void is not allowed here: {signature!r}")

    return JavaType(kind, code), pos + 1


def parse_type(signature: str) -> JavaType:
    """Parse a field type signature such as ``I``, ``[B`` or ``Ljava/lang/String;``"""
    java_type, pos = _parse_at(signature, 0, allow_void=False)
    if pos != len(signature):
        raise SignatureError(f"Trailing characters in type signature: {signature!r}")
    return java_type


def parse_method_signature(signature: str) -> tuple[list[JavaType], JavaType]:
    """Parse a method signature such as ``(ILjava/lang/String;)V``

    Returns the argument types in order and the return type.
    """
    if not signature.startswith("("):
        raise SignatureError(f"Method signature must start with '(': {signature!r}")

    arguments = []
    pos = 1
    while True:
        if pos >= len(signature):
            raise SignatureError(f"Unterminated argument list: {signature!r}")
        if signature[pos] == ")":
            break
        argument, pos = _parse_at(signature, pos, allow_void=False)
        arguments.append(argument)

    return_type, end = _parse_at(signature, pos + 1, allow_void=True)
    if end != len(signature):
        raise SignatureError(f"Trailing characters in method signature: {signature!r}")

    return arguments, return_type


class TypeMapper:
    """Maps JVM types to JNI storage types, accessor families and jvalue members"""

    def __init__(self):
        self.type_map = JNI_TYPE_MAP.copy()
        self.array_type_map = JNI_ARRAY_TYPE_MAP.copy()
        self.object_type_map = JNI_OBJECT_TYPE_MAP.copy()

    def map_type(self, java_type: JavaType) -> str:
        """Map a JVM type to the JNI C type used to store it"""
        if java_type.kind == TypeKind.ARRAY:
            # Only one-dimensional primitive arrays have a typed JNI array
            if java_type.dimensions > 1 or java_type.element is None:
                return GENERIC_ARRAY_TYPE
            return self.array_type_map.get(java_type.element.kind, GENERIC_ARRAY_TYPE)

        if java_type.kind == TypeKind.OBJECT:
            return self.object_type_map.get(java_type.class_name, GENERIC_OBJECT_TYPE)

        return self.type_map[java_type.kind]

    def map_signature(self, signature: str) -> str:
        """Map a raw field type signature to its JNI C type"""
        return self.map_type(parse_type(signature))

    @staticmethod
    def accessor(java_type: JavaType) -> str:
        """Accessor family suffix, e.g. ``Int`` for ``GetIntField``"""
        return JNI_ACCESSOR_MAP[java_type.kind]

    @staticmethod
    def jvalue_member(java_type: JavaType) -> str:
        """Member of the ``jvalue`` union holding a value of this type"""
        try:
            return JVALUE_MEMBER_MAP[java_type.kind]
        except KeyError:
            raise SignatureError(f"No jvalue member for signature: {java_type.signature!r}") from None

    def return_cast(self, java_type: JavaType) -> str:
        """Cast needed to narrow an Object accessor result to the mapped type

        Returns an empty string when the accessor already yields the mapped type.
        """
        c_type = self.map_type(java_type)
        if self.accessor(java_type) == OBJECT_ACCESSOR and c_type != GENERIC_OBJECT_TYPE:
            return f"({c_type}) "
        return ""

    def is_string(self, java_type: JavaType) -> bool:
        return self.map_type(java_type) == STRING_TYPE
