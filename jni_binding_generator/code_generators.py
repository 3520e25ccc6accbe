"""
Code generation functions for JNI bindings
"""

import re

from .config import BindingTarget
from .constants import (
    DESTROY_FUNCTION,
    INIT_FUNCTION,
    INTERNAL_CLASSES,
    INTERNAL_ENUM_METHODS,
    STRING_CONSTRUCTOR_SIGNATURE,
    STRING_TYPE,
)
from .descriptors import ClassDescriptor, FieldDescriptor
from .emission import EmissionBuffers
from .naming import (
    BoundMethod,
    SymbolNamer,
    select_exception_constructors,
    select_fields,
    select_methods,
)
from .type_mapper import JavaType, TypeMapper, parse_method_signature, parse_type

# Parameter type substitutions for the string convenience overloads
CHAR_PTR_SUBSTITUTION = {STRING_TYPE: "char *"}
CONST_CHAR_PTR_SUBSTITUTION = {STRING_TYPE: "const char *"}
CAST_CONST_CHAR_PTR = {STRING_TYPE: "(const char *) "}

# Array types with a jsetA_ setter: array type -> (element type, New/Set<X> infix)
ARRAY_SETTERS = {
    "jbyteArray": ("jbyte", "Byte"),
    "jlongArray": ("jlong", "Long"),
}

# Stack buffer size used when transcoding wchar_t strings to jchar
WCHAR_BUFFER_SIZE = 256

# Functions of the fixed preamble; generated names must not shadow them
RUNTIME_SYMBOLS = (INIT_FUNCTION, DESTROY_FUNCTION, "jerr", "jarrayB", "jenum_ordinal", "jenum_name")

RUNTIME_DECLARATIONS = f"""\
/**
 * Initializes the state of the generated code. Must be called once when your library loads.
 * Returns JNI_TRUE if initialization succeeds. If this function returns JNI_FALSE then an
 * exception explaining the error is pending and no handle is left acquired.
 * It is recommended to call this function in your JNI_OnLoad function.
 */
jboolean {INIT_FUNCTION}(JNIEnv * env);

/**
 * Destroys the state of the generated code. Calling it more than once is harmless and
 * {INIT_FUNCTION}() may be called again afterwards.
 * It is recommended to call this function in your JNI_OnUnload function.
 */
void {DESTROY_FUNCTION}(JNIEnv * env);

/**
 * Equivalent to (*env)->ExceptionCheck(env), just shorter to write.
 */
jboolean jerr(JNIEnv * env);

/**
 * Creates a new byte array of the given length and copies the given buffer into it.
 * Returns NULL when array creation fails. In this case a java exception is thrown.
 */
jbyteArray jarrayB(JNIEnv * env, jbyte * buffer, jsize len);

/**
 * Returns the enum ordinal or -1 if the passed enum value is NULL.
 */
jint jenum_ordinal(JNIEnv * env, jobject enumValue);

/**
 * Returns the name of the enum constant or NULL if the passed enum value is NULL.
 */
jstring jenum_name(JNIEnv * env, jobject enumValue);
"""

RUNTIME_DEFINITIONS = f"""\
#define JNIGENERATOR_WCHAR_BUFFER {WCHAR_BUFFER_SIZE}

static jclass makeGlobalClassRef(JNIEnv * env, const char * name) {{
    jclass clazz = (*env) -> FindClass(env, name);
    if (clazz == 0) {{
        return 0;
    }}

    jclass global = (*env) -> NewGlobalRef(env, clazz);
    (*env) -> DeleteLocalRef(env, clazz);
    return global;
}}

static void throw_internal_OutOfMemoryError(JNIEnv * env, const char * message) {{
    if (!(*env) -> ExceptionCheck(env)) {{
        (*env) -> ThrowNew(env, registry.internal_OutOfMemoryError, message);
    }}
}}

static void throw_internal_IllegalArgumentException(JNIEnv * env, const char * message) {{
    if (!(*env) -> ExceptionCheck(env)) {{
        (*env) -> ThrowNew(env, registry.internal_IllegalArgumentException, message);
    }}
}}

static void throw_internal_NullPointerException(JNIEnv * env, const char * message) {{
    if (!(*env) -> ExceptionCheck(env)) {{
        (*env) -> ThrowNew(env, registry.internal_NullPointerException, message);
    }}
}}

jboolean jerr(JNIEnv * env) {{
    return (*env) -> ExceptionCheck(env);
}}

jbyteArray jarrayB(JNIEnv * env, jbyte * buffer, jsize len) {{
    if (len < 0) {{
        throw_internal_IllegalArgumentException(env, "jarrayB len < 0");
        return 0;
    }}
    if (len > 0 && buffer == 0) {{
        throw_internal_NullPointerException(env, "jarrayB buffer = NULL");
        return 0;
    }}
    jbyteArray res = (*env) -> NewByteArray(env, len);
    if (res == 0) {{
        throw_internal_OutOfMemoryError(env, "jarrayB NewByteArray");
        return 0;
    }}
    if (len > 0) {{
        (*env) -> SetByteArrayRegion(env, res, 0, len, (const jbyte*) buffer);
    }}
    return res;
}}

jint jenum_ordinal(JNIEnv * env, jobject enumValue) {{
    if (enumValue == 0) {{
        return -1;
    }}
    return (jint) (*env) -> CallIntMethod(env, enumValue, registry.internal_Enum_ordinal);
}}

jstring jenum_name(JNIEnv * env, jobject enumValue) {{
    if (enumValue == 0) {{
        return 0;
    }}
    return (jstring) (*env) -> CallObjectMethod(env, enumValue, registry.internal_Enum_name);
}}
"""


def c_string(text: str) -> str:
    """Escape text for use inside a C string literal"""
    return text.replace("\\", "\\\\").replace('"', '\\"')


class CodeGenerator:
    """Generates JNI glue code from class descriptors into emission buffers"""

    def __init__(self, type_mapper: TypeMapper, buffers: EmissionBuffers):
        self.type_mapper = type_mapper
        self.buffers = buffers

    # ------------------------------------------------------------------
    # Shared pieces
    # ------------------------------------------------------------------

    def _parameters(self, arg_types: list[JavaType], substitution: dict | None = None) -> str:
        """Declared parameters ``, jint p0, jstring p1`` following the env parameter"""
        substitution = substitution or {}
        params = []
        for i, arg in enumerate(arg_types):
            c_type = self.type_mapper.map_type(arg)
            c_type = substitution.get(c_type, c_type)
            params.append(f", {c_type} p{i}")
        return "".join(params)

    def _arguments(self, arg_types: list[JavaType], casts: dict | None = None) -> str:
        """Forwarded arguments ``, p0, p1``"""
        casts = casts or {}
        return "".join(
            f", {casts.get(self.type_mapper.map_type(arg), '')}p{i}"
            for i, arg in enumerate(arg_types)
        )

    @staticmethod
    def _init_check(expression: str, message: str) -> tuple[str, ...]:
        """Abort initialization with a descriptive exception if ``expression`` is 0"""
        return (
            f"    if ({expression} == 0) {{",
            "        (*env) -> ExceptionClear(env);",
            f'        (*env) -> ThrowNew(env, registry.internal_Exception, "{c_string(message)}");',
            "        return JNI_FALSE;",
            "    }",
        )

    def _declare(self, owner: str, prototype: str, body: str):
        """Emit a public function: prototype to the header, definition to the impl"""
        self.buffers.declare_symbol(re.search(r"(\w+)\(", prototype).group(1), owner)
        self.buffers.header.append(prototype + ";")
        self.buffers.impl.append(f"{prototype} {{\n{body}}}\n")

    def _resolve_method(self, namer: SymbolNamer, handle_name: str, name: str, signature: str, static: bool) -> str:
        """Cache a jmethodID in the registry and return its access expression"""
        handle = self.buffers.handle("jmethodID", handle_name, owner=f"method {namer.class_name}.{name}{signature}")
        lookup = "GetStaticMethodID" if static else "GetMethodID"
        self.buffers.init.append(
            f'    {handle} = (*env) -> {lookup}(env, registry.{namer.class_handle}, "{c_string(name)}", "{signature}");',
            *self._init_check(handle, f"method not found: {namer.native_name}.{name}{signature}"),
            "",
        )
        self.buffers.destroy.append(f"    {handle} = 0;")
        return handle

    # ------------------------------------------------------------------
    # Runtime preamble
    # ------------------------------------------------------------------

    def generate_runtime(self):
        """Emit the fixed helpers and cache the runtime classes they rely on"""
        self.buffers.header.append(RUNTIME_DECLARATIONS)
        self.buffers.impl.append(RUNTIME_DEFINITIONS)
        for name in RUNTIME_SYMBOLS:
            self.buffers.declare_symbol(name, "runtime")

        for member, native_name in INTERNAL_CLASSES:
            handle = self.buffers.handle("jclass", member)
            # FindClass leaves its own exception pending when these are missing
            self.buffers.init.append(
                f'    {handle} = makeGlobalClassRef(env, "{native_name}");',
                f"    if ({handle} == 0) {{",
                "        return JNI_FALSE;",
                "    }",
                "",
            )
            self.buffers.destroy.append(
                f"    if ({handle} != 0) {{",
                f"        (*env) -> DeleteGlobalRef(env, {handle});",
                f"        {handle} = 0;",
                "    }",
            )

        for member, name, signature in INTERNAL_ENUM_METHODS:
            handle = self.buffers.handle("jmethodID", member)
            self.buffers.init.append(
                f'    {handle} = (*env) -> GetMethodID(env, registry.internal_Enum, "{name}", "{signature}");',
                f"    if ({handle} == 0) {{",
                "        return JNI_FALSE;",
                "    }",
                "",
            )
            self.buffers.destroy.append(f"    {handle} = 0;")

    # ------------------------------------------------------------------
    # Class registration
    # ------------------------------------------------------------------

    def generate_class_registration(self, descriptor: ClassDescriptor) -> bool:
        """Cache the class handle and emit its instance-of predicate

        Returns False without emitting anything if the class is already registered.
        """
        if not self.buffers.register_class(descriptor.name):
            return False

        namer = SymbolNamer(descriptor.name)
        owner = f"class {descriptor.name}"
        handle = self.buffers.handle("jclass", namer.class_handle, owner=owner)

        self.buffers.init.append(
            f'    {handle} = makeGlobalClassRef(env, "{namer.native_name}");',
            *self._init_check(handle, f"class not found: {namer.native_name}"),
            "",
        )
        self.buffers.destroy.append(
            f"    if ({handle} != 0) {{",
            f"        (*env) -> DeleteGlobalRef(env, {handle});",
            f"        {handle} = 0;",
            "    }",
        )

        self._declare(
            owner,
            f"jboolean {namer.symbol('jinstanceof')}(JNIEnv * env, jobject value)",
            f"    return (*env) -> IsInstanceOf(env, value, {handle});\n",
        )
        return True

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def generate_struct(self, descriptor: ClassDescriptor, target: BindingTarget):
        """Emit field accessors, enum constants, constructors and methods of a class"""
        namer = SymbolNamer(descriptor.name)

        enum_constants = []
        for field in select_fields(descriptor, target):
            if field.is_enum:
                enum_constants.append(self.generate_enum_constant(namer, field))
            else:
                self.generate_field(namer, field)

        if enum_constants:
            self.generate_enum_values(namer, enum_constants)

        for bound in select_methods(descriptor, target):
            if bound.method.is_constructor:
                self.generate_constructor(namer, bound)
            else:
                self.generate_method(namer, bound)

    def generate_enum_constant(self, namer: SymbolNamer, field: FieldDescriptor) -> str:
        """Cache an enum constant as a global reference; returns its access expression"""
        handle_name = namer.field_handle(field.name)
        owner = f"enum constant {namer.class_name}.{field.name}"
        handle = self.buffers.handle("jobject", handle_name, owner=owner)
        field_id = f"enum_field_init_{handle_name}"
        local_value = f"enum_value_{handle_name}"
        description = f"{namer.native_name}.{field.name} {field.signature}"

        self.buffers.init.append(
            f'    jfieldID {field_id} = (*env) -> GetStaticFieldID(env, registry.{namer.class_handle}, "{field.name}", "{field.signature}");',
            *self._init_check(field_id, f"field not found: {description}"),
            f"    jobject {local_value} = (*env) -> GetStaticObjectField(env, registry.{namer.class_handle}, {field_id});",
            *self._init_check(local_value, f"value not found: {description}"),
            f"    {handle} = (*env) -> NewGlobalRef(env, {local_value});",
            f"    (*env) -> DeleteLocalRef(env, {local_value});",
            f"    if ({handle} == 0) {{",
            '        throw_internal_OutOfMemoryError(env, "NewGlobalRef");',
            "        return JNI_FALSE;",
            "    }",
            "",
        )
        self.buffers.destroy.append(
            f"    if ({handle} != 0) {{",
            f"        (*env) -> DeleteGlobalRef(env, {handle});",
            f"        {handle} = 0;",
            "    }",
        )

        self._declare(
            owner,
            f"jobject {namer.symbol('jenum', field.name)}(void)",
            f"    return {handle};\n",
        )
        return handle

    def generate_enum_values(self, namer: SymbolNamer, constants: list[str]):
        """Emit the count accessor and the values table of an enum class"""
        count = len(constants)
        owner = f"enum {namer.class_name}"
        array = self.buffers.handle("jobject", namer.enum_values_array, count, owner=owner)

        self._declare(
            owner,
            f"jsize {namer.symbol('jenum', 'count')}(void)",
            f"    return {count};\n",
        )
        self._declare(
            owner,
            f"jobject * {namer.symbol('jenum', 'values')}(void)",
            f"    return {array};\n",
        )

        for i, constant in enumerate(constants):
            self.buffers.init.append(f"    {array}[{i}] = {constant};")
        self.buffers.init.append("")

        # The slots alias the cached constants, which are released on their own
        self.buffers.destroy.append(
            f"    for (int i = 0; i < {count}; i++) {{",
            f"        {array}[i] = 0;",
            "    }",
        )

    def generate_field(self, namer: SymbolNamer, field: FieldDescriptor):
        """Emit getter, setter and any specialized setters of a field"""
        java_type = parse_type(field.signature)
        owner = f"field {namer.class_name}.{field.name}"
        handle = self.buffers.handle("jfieldID", namer.field_handle(field.name), owner=owner)
        lookup = "GetStaticFieldID" if field.is_static else "GetFieldID"

        self.buffers.init.append(
            f'    {handle} = (*env) -> {lookup}(env, registry.{namer.class_handle}, "{field.name}", "{field.signature}");',
            *self._init_check(handle, f"field not found: {namer.native_name}.{field.name} {field.signature}"),
            "",
        )
        self.buffers.destroy.append(f"    {handle} = 0;")

        c_type = self.type_mapper.map_type(java_type)
        accessor = self.type_mapper.accessor(java_type)
        cast = self.type_mapper.return_cast(java_type)

        if field.is_static:
            receiver_param = ""
            target = f"registry.{namer.class_handle}"
            static = "Static"
        else:
            receiver_param = ", jobject instance"
            target = "instance"
            static = ""

        self._declare(
            owner,
            f"{c_type} {namer.symbol('jget', field.name)}(JNIEnv * env{receiver_param})",
            f"    return {cast}(*env) -> Get{static}{accessor}Field(env, {target}, {handle});\n",
        )
        self._declare(
            owner,
            f"void {namer.symbol('jset', field.name)}(JNIEnv * env{receiver_param}, {c_type} value)",
            f"    (*env) -> Set{static}{accessor}Field(env, {target}, {handle}, value);\n",
        )

        store = f"(*env) -> Set{static}ObjectField(env, {target}, {handle}"
        if c_type in ARRAY_SETTERS:
            self.generate_array_setter(namer, field, c_type, receiver_param, store)
        elif c_type == STRING_TYPE:
            self.generate_string_setters(namer, field, receiver_param, store)

    def generate_array_setter(self, namer: SymbolNamer, field: FieldDescriptor, c_type: str,
                              receiver_param: str, store: str):
        """jsetA_: copy a raw buffer into a new Java array and store it in the field"""
        owner = f"field {namer.class_name}.{field.name}"
        element_type, infix = ARRAY_SETTERS[c_type]
        self._declare(
            owner,
            f"jboolean {namer.symbol('jsetA', field.name)}(JNIEnv * env{receiver_param}, {element_type} * value, jsize len)",
            f"""\
    if (value == 0) {{
        {store}, 0);
        return JNI_TRUE;
    }}
    if (len < 0) {{
        len = 0;
    }}
    {c_type} tmp = (*env) -> New{infix}Array(env, len);
    if (tmp == 0) {{
        throw_internal_OutOfMemoryError(env, "New{infix}Array");
        return JNI_FALSE;
    }}
    if (len > 0) {{
        (*env) -> Set{infix}ArrayRegion(env, tmp, 0, len, (const {element_type}*) value);
    }}
    {store}, tmp);
    (*env) -> DeleteLocalRef(env, tmp);
    return JNI_TRUE;
""",
        )

    def generate_string_setters(self, namer: SymbolNamer, field: FieldDescriptor,
                                receiver_param: str, store: str):
        """jsetC_/jsetCC_ for narrow strings and jsetWC_ for wide strings"""
        owner = f"field {namer.class_name}.{field.name}"
        receiver_arg = ", instance" if receiver_param else ""
        const_setter = namer.symbol("jsetCC", field.name)

        self._declare(
            owner,
            f"jboolean {namer.symbol('jsetC', field.name)}(JNIEnv * env{receiver_param}, char * value)",
            f"    return {const_setter}(env{receiver_arg}, (const char *) value);\n",
        )
        self._declare(
            owner,
            f"jboolean {const_setter}(JNIEnv * env{receiver_param}, const char * value)",
            f"""\
    if (value == 0) {{
        {store}, 0);
        return JNI_TRUE;
    }}
    jstring tmp = (*env) -> NewStringUTF(env, value);
    if (tmp == 0) {{
        throw_internal_OutOfMemoryError(env, "NewStringUTF");
        return JNI_FALSE;
    }}
    {store}, tmp);
    (*env) -> DeleteLocalRef(env, tmp);
    return JNI_TRUE;
""",
        )
        self._declare(
            owner,
            f"jboolean {namer.symbol('jsetWC', field.name)}(JNIEnv * env{receiver_param}, wchar_t * value)",
            f"""\
    if (value == 0) {{
        {store}, 0);
        return JNI_TRUE;
    }}
    jsize len = 0;
    while (value[len] != 0) {{
        len++;
    }}
    jstring tmp;
    if (sizeof(wchar_t) == sizeof(jchar)) {{
        tmp = (*env) -> NewString(env, (const jchar*) value, len);
    }} else {{
        jchar stackBuffer[JNIGENERATOR_WCHAR_BUFFER];
        jchar * buffer = stackBuffer;
        if (len > JNIGENERATOR_WCHAR_BUFFER) {{
            buffer = (jchar*) malloc(sizeof(jchar) * (size_t) len);
            if (buffer == 0) {{
                throw_internal_OutOfMemoryError(env, "malloc");
                return JNI_FALSE;
            }}
        }}
        for (jsize i = 0; i < len; i++) {{
            buffer[i] = (jchar) value[i];
        }}
        tmp = (*env) -> NewString(env, (const jchar*) buffer, len);
        if (buffer != stackBuffer) {{
            free(buffer);
        }}
    }}
    if (tmp == 0) {{
        throw_internal_OutOfMemoryError(env, "NewString");
        return JNI_FALSE;
    }}
    {store}, tmp);
    (*env) -> DeleteLocalRef(env, tmp);
    return JNI_TRUE;
""",
        )

    # ------------------------------------------------------------------
    # Constructors and methods
    # ------------------------------------------------------------------

    def generate_constructor(self, namer: SymbolNamer, bound: BoundMethod):
        """Emit jnew_ for one constructor overload"""
        method = bound.method
        owner = f"constructor {namer.class_name}.{method.name}{method.signature}"
        arg_types, _ = parse_method_signature(method.signature)
        handle = self._resolve_method(
            namer, namer.constructor_handle(bound.ordinal), method.name, method.signature, static=False,
        )

        self._declare(
            owner,
            f"jobject {namer.symbol('jnew', suffix=bound.suffix)}(JNIEnv * env{self._parameters(arg_types)})",
            f"""\
    jobject obj = (*env) -> NewObject(env, registry.{namer.class_handle}, {handle}{self._arguments(arg_types)});
    if (obj == 0) {{
        throw_internal_OutOfMemoryError(env, "NewObject");
    }}
    return obj;
""",
        )

    def generate_method(self, namer: SymbolNamer, bound: BoundMethod):
        """Emit a jcall_ trampoline for a static or instance method"""
        method = bound.method
        owner = f"method {namer.class_name}.{method.name}{method.signature}"
        arg_types, return_type = parse_method_signature(method.signature)
        handle = self._resolve_method(
            namer, namer.method_handle(method.name, bound.ordinal), method.name, method.signature,
            static=method.is_static,
        )

        return_c_type = self.type_mapper.map_type(return_type)
        accessor = self.type_mapper.accessor(return_type)
        prefix = ""
        if return_c_type != "void":
            prefix = "return " + self.type_mapper.return_cast(return_type)

        params = self._parameters(arg_types)
        args = self._arguments(arg_types)
        name = namer.symbol("jcall", method.name, bound.suffix)

        if method.is_static:
            self._declare(
                owner,
                f"{return_c_type} {name}(JNIEnv * env{params})",
                f"    {prefix}(*env) -> CallStatic{accessor}Method(env, registry.{namer.class_handle}, {handle}{args});\n",
            )
        else:
            self._declare(
                owner,
                f"{return_c_type} {name}(JNIEnv * env, jobject instance{params})",
                f"    {prefix}(*env) -> Call{accessor}Method(env, instance, {handle}{args});\n",
            )

    # ------------------------------------------------------------------
    # Exceptions
    # ------------------------------------------------------------------

    def generate_exception(self, descriptor: ClassDescriptor, target: BindingTarget):
        """Emit jthrow_ functions for every selected constructor of an exception class"""
        namer = SymbolNamer(descriptor.name)

        for bound in select_exception_constructors(descriptor, target):
            method = bound.method
            owner = f"exception constructor {namer.class_name}.{method.name}{method.signature}"
            arg_types, _ = parse_method_signature(method.signature)
            handle = self._resolve_method(
                namer, namer.exception_constructor_handle(bound.ordinal), method.name, method.signature,
                static=False,
            )

            # An already pending exception is never replaced
            self._declare(
                owner,
                f"void {namer.symbol('jthrow', suffix=bound.suffix)}(JNIEnv * env{self._parameters(arg_types)})",
                f"""\
    if ((*env) -> ExceptionCheck(env)) {{
        return;
    }}
    jobject obj = (*env) -> NewObject(env, registry.{namer.class_handle}, {handle}{self._arguments(arg_types)});
    if (obj == 0) {{
        throw_internal_OutOfMemoryError(env, "NewObject");
        return;
    }}
    (*env) -> Throw(env, (jthrowable) obj);
""",
            )

            if any(self.type_mapper.is_string(arg) for arg in arg_types):
                self.generate_string_exception(namer, bound, arg_types, handle)

    def generate_string_exception(self, namer: SymbolNamer, bound: BoundMethod,
                                  arg_types: list[JavaType], handle: str):
        """jthrowC_/jthrowCC_ taking C strings in place of jstring arguments"""
        owner = f"exception constructor {namer.class_name}.{bound.method.name}{bound.method.signature}"
        const_thrower = namer.symbol("jthrowCC", suffix=bound.suffix)

        self._declare(
            owner,
            f"void {namer.symbol('jthrowC', suffix=bound.suffix)}(JNIEnv * env{self._parameters(arg_types, CHAR_PTR_SUBSTITUTION)})",
            f"    {const_thrower}(env{self._arguments(arg_types, CAST_CONST_CHAR_PTR)});\n",
        )

        prototype = f"void {const_thrower}(JNIEnv * env{self._parameters(arg_types, CONST_CHAR_PTR_SUBSTITUTION)})"

        if bound.method.signature == STRING_CONSTRUCTOR_SIGNATURE:
            self._declare(
                owner,
                prototype,
                f"""\
    if ((*env) -> ExceptionCheck(env)) {{
        return;
    }}
    (*env) -> ThrowNew(env, registry.{namer.class_handle}, p0);
""",
            )
            return

        lines = [
            "    if ((*env) -> ExceptionCheck(env)) {",
            "        return;",
            "    }",
            f"    jvalue parameters[{len(arg_types)}];",
        ]
        for i, arg in enumerate(arg_types):
            if self.type_mapper.is_string(arg):
                lines.extend([
                    f"    if (p{i} == 0) {{",
                    f"        parameters[{i}].l = 0;",
                    "    } else {",
                    f"        parameters[{i}].l = (*env) -> NewStringUTF(env, p{i});",
                    f"        if (parameters[{i}].l == 0) {{",
                    '            throw_internal_OutOfMemoryError(env, "NewStringUTF");',
                    "            return;",
                    "        }",
                    "    }",
                ])
                continue
            lines.append(f"    parameters[{i}].{self.type_mapper.jvalue_member(arg)} = p{i};")

        lines.extend([
            f"    jobject obj = (*env) -> NewObjectA(env, registry.{namer.class_handle}, {handle}, (const jvalue*) parameters);",
            "    if (obj == 0) {",
            '        throw_internal_OutOfMemoryError(env, "NewObjectA");',
            "        return;",
            "    }",
            "    (*env) -> Throw(env, (jthrowable) obj);",
        ])
        self._declare(owner, prototype, "\n".join(lines) + "\n")
