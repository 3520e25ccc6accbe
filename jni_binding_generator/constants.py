"""
Constants and mappings for JNI bindings generation
"""

from enum import Enum


class TypeKind(Enum):
    """Broad category of a JVM type signature"""
    BOOLEAN = "Z"
    BYTE = "B"
    CHAR = "C"
    SHORT = "S"
    INT = "I"
    LONG = "J"
    FLOAT = "F"
    DOUBLE = "D"
    VOID = "V"
    ARRAY = "["
    OBJECT = "L"


PRIMITIVE_KINDS = frozenset({
    TypeKind.BOOLEAN,
    TypeKind.BYTE,
    TypeKind.CHAR,
    TypeKind.SHORT,
    TypeKind.INT,
    TypeKind.LONG,
    TypeKind.FLOAT,
    TypeKind.DOUBLE,
})

# Mapping from JVM primitive kinds to JNI storage types
JNI_TYPE_MAP = {
    TypeKind.BOOLEAN: "jboolean",
    TypeKind.BYTE: "jbyte",
    TypeKind.CHAR: "jchar",
    TypeKind.SHORT: "jshort",
    TypeKind.INT: "jint",
    TypeKind.LONG: "jlong",
    TypeKind.FLOAT: "jfloat",
    TypeKind.DOUBLE: "jdouble",
    TypeKind.VOID: "void",
}

# One-dimensional arrays of primitives
JNI_ARRAY_TYPE_MAP = {
    TypeKind.BOOLEAN: "jbooleanArray",
    TypeKind.BYTE: "jbyteArray",
    TypeKind.CHAR: "jcharArray",
    TypeKind.SHORT: "jshortArray",
    TypeKind.INT: "jintArray",
    TypeKind.LONG: "jlongArray",
    TypeKind.FLOAT: "jfloatArray",
    TypeKind.DOUBLE: "jdoubleArray",
}

GENERIC_ARRAY_TYPE = "jarray"
GENERIC_OBJECT_TYPE = "jobject"

# Object types with a dedicated JNI storage type
JNI_OBJECT_TYPE_MAP = {
    "java.lang.String": "jstring",
    "java.lang.ref.WeakReference": "jweak",
    "java.lang.Class": "jclass",
}

# Suffix of the Get<X>Field / Call<X>Method family
JNI_ACCESSOR_MAP = {
    TypeKind.BOOLEAN: "Boolean",
    TypeKind.BYTE: "Byte",
    TypeKind.CHAR: "Char",
    TypeKind.SHORT: "Short",
    TypeKind.INT: "Int",
    TypeKind.LONG: "Long",
    TypeKind.FLOAT: "Float",
    TypeKind.DOUBLE: "Double",
    TypeKind.VOID: "Void",
    TypeKind.ARRAY: "Object",
    TypeKind.OBJECT: "Object",
}

# Member of the jvalue union
JVALUE_MEMBER_MAP = {
    TypeKind.BOOLEAN: "z",
    TypeKind.BYTE: "b",
    TypeKind.CHAR: "c",
    TypeKind.SHORT: "s",
    TypeKind.INT: "i",
    TypeKind.LONG: "j",
    TypeKind.FLOAT: "f",
    TypeKind.DOUBLE: "d",
    TypeKind.ARRAY: "l",
    TypeKind.OBJECT: "l",
}

OBJECT_ACCESSOR = "Object"
STRING_TYPE = "jstring"

CONSTRUCTOR_NAME = "<init>"
STATIC_INITIALIZER_NAME = "<clinit>"
STRING_CONSTRUCTOR_SIGNATURE = "(Ljava/lang/String;)V"

# Enum reflection methods that are never bound
ENUM_REFLECTION_METHODS = frozenset({"values", "valueOf"})

# Supertypes that never get struct bindings
EXCLUDED_STRUCTS = ("java.lang.Enum", "java.lang.String")

# Names of the generated lifecycle functions and the handle registry
INIT_FUNCTION = "jnigenerator_init"
INIT_HANDLES_FUNCTION = "jnigenerator_init_handles"
DESTROY_FUNCTION = "jnigenerator_destroy"
REGISTRY_STRUCT = "jnigenerator_registry"
REGISTRY = "registry"

GENERATED_BANNER = "//THIS FILE IS MACHINE GENERATED, DO NOT EDIT"

# Runtime classes cached ahead of every bound class: (registry member, native path)
INTERNAL_CLASSES = [
    ("internal_Exception", "java/lang/Exception"),
    ("internal_OutOfMemoryError", "java/lang/OutOfMemoryError"),
    ("internal_IllegalArgumentException", "java/lang/IllegalArgumentException"),
    ("internal_NullPointerException", "java/lang/NullPointerException"),
    ("internal_Enum", "java/lang/Enum"),
]

# Methods of java.lang.Enum used by jenum_ordinal/jenum_name
INTERNAL_ENUM_METHODS = [
    ("internal_Enum_ordinal", "ordinal", "()I"),
    ("internal_Enum_name", "name", "()Ljava/lang/String;"),
]
