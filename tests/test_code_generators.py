"""
Unit tests for CodeGenerator, EmissionBuffers and OutputBuilder
"""

import pytest

from jni_binding_generator.code_generators import CodeGenerator
from jni_binding_generator.emission import DuplicateSymbolError, EmissionBuffers, OutputBuilder, header_guard
from jni_binding_generator.type_mapper import SignatureError, TypeMapper
from jni_binding_generator.descriptors import ClassDescriptor


def _body(impl: str, start: str) -> str:
    """Text of the generated function whose definition starts with ``start``"""
    begin = impl.index(start)
    return impl[begin:impl.index("\n}\n", begin)]


class TestEmissionBuffers:
    """Test the emission buffers"""

    def test_streams_preserve_order(self):
        buffers = EmissionBuffers()
        buffers.init.append("a", "b")
        buffers.init.append("c")
        assert buffers.init.getvalue() == "a\nb\nc\n"

    def test_register_class_is_idempotent(self):
        buffers = EmissionBuffers()
        assert buffers.register_class("pkg.Point")
        assert not buffers.register_class("pkg.Point")

    def test_handle(self):
        buffers = EmissionBuffers()
        assert buffers.handle("jclass", "Point") == "registry.Point"
        buffers.handle("jobject", "Color_enum_values", 3)
        assert buffers.registry_members == ["jclass Point;", "jobject Color_enum_values[3];"]

    def test_duplicate_registry_member(self):
        buffers = EmissionBuffers()
        buffers.handle("jfieldID", "Shape_C_0", owner="field pkg.Shape.C_0")
        with pytest.raises(DuplicateSymbolError, match="'Shape_C_0' of method pkg.Shape.<init>.* clashes with field pkg.Shape.C_0"):
            buffers.handle("jmethodID", "Shape_C_0", owner="method pkg.Shape.<init>()V")

    def test_registry_flag_is_reserved(self):
        buffers = EmissionBuffers()
        with pytest.raises(DuplicateSymbolError, match="registry state flag"):
            buffers.handle("jclass", "initialized", owner="class pkg.initialized")

    def test_duplicate_function(self):
        buffers = EmissionBuffers()
        buffers.declare_symbol("jget_Date_x", "field a.Date.x")
        with pytest.raises(DuplicateSymbolError, match="field b.Date.x clashes with field a.Date.x"):
            buffers.declare_symbol("jget_Date_x", "field b.Date.x")

    def test_header_guard(self):
        assert header_guard("jnigen.h") == "JNIGEN_H"
        assert header_guard("1-bindings.h") == "_1_BINDINGS_H"


class TestCodeGenerator:
    """Test the CodeGenerator class"""

    def setup_method(self):
        """Set up test fixtures"""
        self.buffers = EmissionBuffers()
        self.generator = CodeGenerator(TypeMapper(), self.buffers)

    def test_runtime_preamble(self):
        self.generator.generate_runtime()
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()
        init = self.buffers.init.getvalue()

        assert "jboolean jnigenerator_init(JNIEnv * env);" in header
        assert "void jnigenerator_destroy(JNIEnv * env);" in header
        assert "jbyteArray jarrayB(JNIEnv * env, jbyte * buffer, jsize len);" in header
        assert "jint jenum_ordinal(JNIEnv * env, jobject enumValue);" in header
        assert "static jclass makeGlobalClassRef(JNIEnv * env, const char * name) {" in impl
        assert 'registry.internal_Exception = makeGlobalClassRef(env, "java/lang/Exception");' in init
        assert '"ordinal", "()I"' in init
        assert "jclass internal_OutOfMemoryError;" in self.buffers.registry_members

    def test_class_registration(self, descriptors):
        assert self.generator.generate_class_registration(descriptors["pkg.Point"])

        init = self.buffers.init.getvalue()
        assert 'registry.Point = makeGlobalClassRef(env, "pkg/Point");' in init
        assert '"class not found: pkg/Point"' in init
        assert "(*env) -> ExceptionClear(env);" in init
        assert "return JNI_FALSE;" in init

        destroy = self.buffers.destroy.getvalue()
        assert "    if (registry.Point != 0) {" in destroy
        assert "(*env) -> DeleteGlobalRef(env, registry.Point);" in destroy

        assert "jboolean jinstanceof_Point(JNIEnv * env, jobject value);" in self.buffers.header.getvalue()
        assert "return (*env) -> IsInstanceOf(env, value, registry.Point);" in self.buffers.impl.getvalue()

    def test_class_registration_twice_emits_nothing(self, descriptors):
        self.generator.generate_class_registration(descriptors["pkg.Point"])
        before = (self.buffers.header.getvalue(), self.buffers.impl.getvalue(),
                  self.buffers.init.getvalue(), self.buffers.destroy.getvalue())

        assert not self.generator.generate_class_registration(descriptors["pkg.Point"])
        after = (self.buffers.header.getvalue(), self.buffers.impl.getvalue(),
                 self.buffers.init.getvalue(), self.buffers.destroy.getvalue())
        assert before == after
        assert self.buffers.registry_members == ["jclass Point;"]

    def test_instance_field(self, descriptors, target):
        self.generator.generate_struct(descriptors["pkg.Point"], target("pkg.Point"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "jint jget_Point_x(JNIEnv * env, jobject instance);" in header
        assert "void jset_Point_x(JNIEnv * env, jobject instance, jint value);" in header
        assert "    return (*env) -> GetIntField(env, instance, registry.Point_x);" in impl
        assert "    (*env) -> SetIntField(env, instance, registry.Point_x, value);" in impl
        assert 'registry.Point_x = (*env) -> GetFieldID(env, registry.Point, "x", "I");' in self.buffers.init.getvalue()
        assert '"field not found: pkg/Point.x I"' in self.buffers.init.getvalue()

    def test_string_field_setters(self, descriptors, target):
        self.generator.generate_struct(descriptors["pkg.Holder"], target("pkg.Holder"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "jstring jget_Holder_label(JNIEnv * env, jobject instance);" in header
        assert "jboolean jsetC_Holder_label(JNIEnv * env, jobject instance, char * value);" in header
        assert "jboolean jsetCC_Holder_label(JNIEnv * env, jobject instance, const char * value);" in header
        assert "jboolean jsetWC_Holder_label(JNIEnv * env, jobject instance, wchar_t * value);" in header
        assert "    return jsetCC_Holder_label(env, instance, (const char *) value);" in impl
        assert "return (jstring) (*env) -> GetObjectField(env, instance, registry.Holder_label);" in impl
        assert "jstring tmp = (*env) -> NewStringUTF(env, value);" in impl
        assert "jchar stackBuffer[JNIGENERATOR_WCHAR_BUFFER];" in impl
        assert "if (sizeof(wchar_t) == sizeof(jchar)) {" in impl

        null_branch = ("    if (value == 0) {\n"
                       "        (*env) -> SetObjectField(env, instance, registry.Holder_label, 0);\n"
                       "        return JNI_TRUE;\n"
                       "    }")
        assert null_branch in _body(impl, "jboolean jsetCC_Holder_label(JNIEnv * env, jobject instance, const char * value) {")
        assert null_branch in _body(impl, "jboolean jsetWC_Holder_label(JNIEnv * env, jobject instance, wchar_t * value) {")

    def test_static_string_field_setters(self, descriptors, target):
        """Static string fields get receiver-less setters storing through the class handle"""
        self.generator.generate_struct(descriptors["pkg.Holder"], target("pkg.Holder"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "jstring jget_Holder_motd(JNIEnv * env);" in header
        assert "jboolean jsetC_Holder_motd(JNIEnv * env, char * value);" in header
        assert "jboolean jsetCC_Holder_motd(JNIEnv * env, const char * value);" in header
        assert "jboolean jsetWC_Holder_motd(JNIEnv * env, wchar_t * value);" in header
        assert "return (jstring) (*env) -> GetStaticObjectField(env, registry.Holder, registry.Holder_motd);" in impl
        assert "    return jsetCC_Holder_motd(env, (const char *) value);" in impl
        assert 'GetStaticFieldID(env, registry.Holder, "motd", "Ljava/lang/String;")' in self.buffers.init.getvalue()

        null_branch = ("    if (value == 0) {\n"
                       "        (*env) -> SetStaticObjectField(env, registry.Holder, registry.Holder_motd, 0);\n"
                       "        return JNI_TRUE;\n"
                       "    }")
        store = "    (*env) -> SetStaticObjectField(env, registry.Holder, registry.Holder_motd, tmp);"
        for prototype in ("jboolean jsetCC_Holder_motd(JNIEnv * env, const char * value) {",
                          "jboolean jsetWC_Holder_motd(JNIEnv * env, wchar_t * value) {"):
            body = _body(impl, prototype)
            assert null_branch in body
            assert store in body
            assert "instance" not in body

    def test_long_array_setter(self, descriptors, target):
        self.generator.generate_struct(descriptors["pkg.Holder"], target("pkg.Holder"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "jboolean jsetA_Holder_stamps(JNIEnv * env, jobject instance, jlong * value, jsize len);" in header
        assert "jlongArray tmp = (*env) -> NewLongArray(env, len);" in impl
        assert "(*env) -> SetLongArrayRegion(env, tmp, 0, len, (const jlong*) value);" in impl
        assert "(*env) -> SetObjectField(env, instance, registry.Holder_stamps, tmp);" in impl

    def test_no_specialized_setter_for_other_types(self, descriptors, target):
        self.generator.generate_struct(descriptors["pkg.Point"], target("pkg.Point"))
        header = self.buffers.header.getvalue()
        assert "jsetA_" not in header
        assert "jsetC_" not in header

    def test_methods(self, descriptors, target):
        self.generator.generate_struct(descriptors["pkg.Calc"], target("pkg.Calc"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "jdouble jcall_Calc_add(JNIEnv * env, jobject instance, jdouble p0, jdouble p1);" in header
        assert "jint jcall_Calc_add_1(JNIEnv * env, jobject instance, jint p0, jint p1);" in header
        assert "jlong jcall_Calc_add_2(JNIEnv * env, jobject instance, jlong p0, jlong p1);" in header
        assert "    return (*env) -> CallIntMethod(env, instance, registry.Calc_M_add_1, p0, p1);" in impl

        assert "jstring jcall_Calc_describe(JNIEnv * env);" in header
        assert ("    return (jstring) (*env) -> CallStaticObjectMethod(env, registry.Calc, "
                "registry.Calc_M_describe_0);") in impl
        assert 'GetStaticMethodID(env, registry.Calc, "describe", "()Ljava/lang/String;")' in self.buffers.init.getvalue()

        assert "void jcall_Calc_reset(JNIEnv * env, jobject instance);" in header
        assert "    (*env) -> CallVoidMethod(env, instance, registry.Calc_M_reset_0);" in impl
        assert "lambda$reset$0" not in header

    def test_constructors(self, descriptors, target):
        self.generator.generate_struct(descriptors["pkg.Calc"], target("pkg.Calc"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "jobject jnew_Calc(JNIEnv * env);" in header
        assert "jobject jnew_Calc_1(JNIEnv * env, jint p0);" in header
        assert "jobject obj = (*env) -> NewObject(env, registry.Calc, registry.Calc_C_1, p0);" in impl
        assert 'throw_internal_OutOfMemoryError(env, "NewObject");' in impl
        assert 'registry.Calc_C_0 = (*env) -> GetMethodID(env, registry.Calc, "<init>", "()V");' in self.buffers.init.getvalue()
        assert '"method not found: pkg/Calc.<init>(I)V"' in self.buffers.init.getvalue()

    def test_enum_constants(self, descriptors, target):
        self.generator.generate_struct(descriptors["pkg.Color"], target("pkg.Color"))
        header = self.buffers.header.getvalue()
        init = self.buffers.init.getvalue()

        assert "jobject jenum_Color_RED(void);" in header
        assert "jsize jenum_Color_count(void);" in header
        assert "jobject * jenum_Color_values(void);" in header
        assert "    return 3;" in self.buffers.impl.getvalue()
        assert "jobject Color_enum_values[3];" in self.buffers.registry_members
        assert 'jfieldID enum_field_init_Color_RED = (*env) -> GetStaticFieldID(env, registry.Color, "RED", "Lpkg/Color;");' in init
        assert "registry.Color_RED = (*env) -> NewGlobalRef(env, enum_value_Color_RED);" in init
        assert '"value not found: pkg/Color.RED Lpkg/Color;"' in init
        assert "jcall_Color_values" not in header
        assert "jcall_Color_valueOf" not in header
        assert "$VALUES" not in header

    def test_exception_throw_functions(self, descriptors, target):
        self.generator.generate_exception(descriptors["pkg.MyException"], target("pkg.MyException"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "void jthrow_MyException(JNIEnv * env);" in header
        assert "void jthrow_MyException_1(JNIEnv * env, jstring p0);" in header
        assert "void jthrowC_MyException_1(JNIEnv * env, char * p0);" in header
        assert "void jthrowCC_MyException_1(JNIEnv * env, const char * p0);" in header
        assert "jthrowC_MyException(" not in header

        assert "    jthrowCC_MyException_1(env, (const char *) p0);" in impl
        assert "    (*env) -> ThrowNew(env, registry.MyException, p0);" in impl
        assert "NewObjectA" not in impl
        assert "    if ((*env) -> ExceptionCheck(env)) {" in impl
        assert "    (*env) -> Throw(env, (jthrowable) obj);" in impl

    def test_exception_with_mixed_arguments(self, target):
        descriptor = ClassDescriptor.from_dict({
            "name": "pkg.io.IOFailure",
            "access": ["public"],
            "methods": [
                {"name": "<init>", "signature": "(Ljava/lang/String;IJLjava/lang/Object;)V", "access": ["public"]},
            ],
        })
        self.generator.generate_exception(descriptor, target("pkg.io.IOFailure"))
        header = self.buffers.header.getvalue()
        impl = self.buffers.impl.getvalue()

        assert "void jthrowCC_IOFailure(JNIEnv * env, const char * p0, jint p1, jlong p2, jobject p3);" in header
        assert "    jvalue parameters[4];" in impl
        assert "        parameters[0].l = (*env) -> NewStringUTF(env, p0);" in impl
        assert "    parameters[1].i = p1;" in impl
        assert "    parameters[2].j = p2;" in impl
        assert "    parameters[3].l = p3;" in impl
        assert ("    jobject obj = (*env) -> NewObjectA(env, registry.IOFailure, "
                "registry.IOFailure_EC_0, (const jvalue*) parameters);") in impl

    def test_unknown_signature_is_fatal(self, target):
        descriptor = ClassDescriptor.from_dict({
            "name": "pkg.Broken",
            "fields": [{"name": "bad", "signature": "Q", "access": ["public"]}],
        })
        with pytest.raises(SignatureError):
            self.generator.generate_struct(descriptor, target("pkg.Broken"))


class TestOutputBuilder:
    """Test the OutputBuilder class"""

    def test_build_header(self):
        buffers = EmissionBuffers()
        buffers.header.append("void jthrow_Foo(JNIEnv * env);")

        result = OutputBuilder.build_header(buffers, "jnigen.h")

        assert result.startswith("//THIS FILE IS MACHINE GENERATED, DO NOT EDIT\n")
        assert "#ifndef JNIGEN_H" in result
        assert "#include <jni.h>" in result
        assert "void jthrow_Foo(JNIEnv * env);" in result
        assert result.rstrip().endswith("#endif /* JNIGEN_H */")

    def test_build_impl(self):
        buffers = EmissionBuffers()
        handle = buffers.handle("jclass", "Foo")
        buffers.init.append(f"    {handle} = 0;")
        buffers.destroy.append(f"    {handle} = 0;")

        result = OutputBuilder.build_impl(buffers, '#include "jnigen.h"')

        assert '#include "jnigen.h"' in result
        assert "struct jnigenerator_registry {\n    jboolean initialized;\n    jclass Foo;\n};" in result
        assert "static struct jnigenerator_registry registry;" in result
        assert "static jboolean jnigenerator_init_handles(JNIEnv * env) {\n    registry.Foo = 0;\n    return JNI_TRUE;\n}" in result
        assert "        jnigenerator_destroy(env);\n        return JNI_FALSE;" in result
        assert "void jnigenerator_destroy(JNIEnv * env) {\n    registry.Foo = 0;\n    registry.initialized = JNI_FALSE;\n}" in result
        # The registry has to be complete before any definition uses it
        assert result.index("static struct jnigenerator_registry registry;") < result.index("jnigenerator_init_handles")
