"""
Emission buffers and final output assembly for JNI bindings
"""

import re

from .constants import (
    DESTROY_FUNCTION,
    GENERATED_BANNER,
    INIT_FUNCTION,
    INIT_HANDLES_FUNCTION,
    REGISTRY,
    REGISTRY_STRUCT,
)


class DuplicateSymbolError(ValueError):
    """Raised when two bound members map to the same generated C name"""


class TextStream:
    """Append-only text accumulator; every appended line gets a trailing newline"""

    def __init__(self):
        self._parts = []

    def append(self, *lines: str):
        for line in lines:
            self._parts.append(line)
            self._parts.append("\n")

    def getvalue(self) -> str:
        return "".join(self._parts)

    def __bool__(self):
        return bool(self._parts)


class EmissionBuffers:
    """State of one generation run

    ``header`` collects public declarations, ``impl`` the definitions,
    ``init`` and ``destroy`` the bodies of the lifecycle functions. Every
    cached handle is a member of the registry struct; ``handle`` records its
    declaration so it can be placed ahead of all definitions. Registry members
    and public functions are claimed by name, so a second member mapping to
    an existing name fails the run.
    """

    def __init__(self):
        self.header = TextStream()
        self.init = TextStream()
        self.destroy = TextStream()
        self.impl = TextStream()
        self.registry_members = []
        self.registered_classes = set()
        self._member_owners = {"initialized": "the registry state flag"}
        self._symbol_owners = {}

    def register_class(self, class_name: str) -> bool:
        """Mark a class as registered; False if it already was"""
        if class_name in self.registered_classes:
            return False
        self.registered_classes.add(class_name)
        return True

    @staticmethod
    def _claim(owners: dict, kind: str, name: str, owner: str):
        previous = owners.get(name)
        if previous is not None:
            raise DuplicateSymbolError(f"Generated {kind} '{name}' of {owner} clashes with {previous}")
        owners[name] = owner

    def declare_symbol(self, name: str, owner: str):
        """Claim a public function name for ``owner``"""
        self._claim(self._symbol_owners, "function", name, owner)

    def handle(self, c_type: str, name: str, length: int | None = None, owner: str = "runtime") -> str:
        """Declare a registry member and return the expression that accesses it"""
        self._claim(self._member_owners, "registry member", name, owner)
        declaration = f"{c_type} {name}"
        if length is not None:
            declaration += f"[{length}]"
        self.registry_members.append(declaration + ";")
        return f"{REGISTRY}.{name}"


def header_guard(header_name: str) -> str:
    """Include guard macro derived from the header file name"""
    guard = re.sub(r"[^A-Za-z0-9]", "_", header_name).upper()
    if not guard or guard[0].isdigit():
        guard = "_" + guard
    return guard


class OutputBuilder:
    """Builds the final header and implementation files"""

    @staticmethod
    def build_header(buffers: EmissionBuffers, header_name: str = "jnigenerator.h") -> str:
        """Build the declarations file"""
        guard = header_guard(header_name)
        parts = [
            GENERATED_BANNER,
            f"#ifndef {guard}",
            f"#define {guard}",
            "",
            "#include <jni.h>",
            "#include <stddef.h>",
            "",
            "#ifdef __cplusplus",
            'extern "C" {',
            "#endif",
            "",
            buffers.header.getvalue(),
            "#ifdef __cplusplus",
            "}",
            "#endif",
            "",
            f"#endif /* {guard} */",
            "",
        ]
        return "\n".join(parts)

    @staticmethod
    def build_impl(buffers: EmissionBuffers, include_line: str) -> str:
        """Build the definitions file, wrapping init/destroy in their guard functions"""
        parts = [
            GENERATED_BANNER,
            include_line,
            "#include <stdlib.h>",
            "",
            f"struct {REGISTRY_STRUCT} {{",
            "    jboolean initialized;",
        ]
        parts.extend(f"    {member}" for member in buffers.registry_members)
        parts.extend([
            "};",
            "",
            f"static struct {REGISTRY_STRUCT} {REGISTRY};",
            "",
            buffers.impl.getvalue(),
            f"static jboolean {INIT_HANDLES_FUNCTION}(JNIEnv * env) {{",
            buffers.init.getvalue() + "    return JNI_TRUE;",
            "}",
            "",
            f"jboolean {INIT_FUNCTION}(JNIEnv * env) {{",
            f"    if ({REGISTRY}.initialized) {{",
            "        return JNI_TRUE;",
            "    }",
            f"    if (!{INIT_HANDLES_FUNCTION}(env)) {{",
            f"        {DESTROY_FUNCTION}(env);",
            "        return JNI_FALSE;",
            "    }",
            f"    {REGISTRY}.initialized = JNI_TRUE;",
            "    return JNI_TRUE;",
            "}",
            "",
            f"void {DESTROY_FUNCTION}(JNIEnv * env) {{",
            buffers.destroy.getvalue() + f"    {REGISTRY}.initialized = JNI_FALSE;",
            "}",
            "",
        ])
        return "\n".join(parts)
