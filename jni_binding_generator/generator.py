"""
Main JNI bindings generator orchestration
"""

from pathlib import Path

from .code_generators import CodeGenerator
from .config import BindingTarget
from .constants import EXCLUDED_STRUCTS
from .descriptors import ClassDescriptor
from .emission import EmissionBuffers, OutputBuilder
from .type_mapper import TypeMapper


def write_output(path, content: str):
    """Truncate and rewrite ``path``, following symlinks and keeping its mode"""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8", newline="\n")


class JNIBindingsGenerator:
    """Main orchestrator for generating JNI bindings from class descriptors"""

    def __init__(self, provider):
        self.provider = provider
        self.type_mapper = TypeMapper()

    def generate(self, structs: dict[str, BindingTarget], exceptions: dict[str, BindingTarget],
                 include_line: str, header_name: str = "jnigenerator.h") -> tuple[str, str]:
        """Run one full generation and return the (header, implementation) texts

        Nothing is written; a malformed descriptor raises before any output exists.
        """
        structs = {name: target for name, target in structs.items() if name not in EXCLUDED_STRUCTS}

        all_classes = sorted(set(structs) | set(exceptions))
        descriptors = self.provider.get_classes(all_classes)

        buffers = EmissionBuffers()
        code_generator = CodeGenerator(self.type_mapper, buffers)
        code_generator.generate_runtime()

        for name in all_classes:
            code_generator.generate_class_registration(self._descriptor(descriptors, name))

        for name in sorted(structs):
            print(f"Processing struct: {name}")
            code_generator.generate_struct(self._descriptor(descriptors, name), structs[name])

        for name in sorted(exceptions):
            print(f"Processing exception: {name}")
            code_generator.generate_exception(self._descriptor(descriptors, name), exceptions[name])

        header = OutputBuilder.build_header(buffers, header_name)
        impl = OutputBuilder.build_impl(buffers, include_line)
        return header, impl

    @staticmethod
    def _descriptor(descriptors: dict[str, ClassDescriptor], name: str) -> ClassDescriptor:
        descriptor = descriptors.get(name)
        if descriptor is None:
            raise LookupError(f"Descriptor provider returned nothing for class {name}")
        return descriptor

    def generate_files(self, structs: dict[str, BindingTarget], exceptions: dict[str, BindingTarget],
                       header_output: str, impl_output: str, include_line: str) -> tuple[str, str]:
        """Generate and overwrite the header and implementation files"""
        header, impl = self.generate(structs, exceptions, include_line, Path(header_output).name)

        write_output(header_output, header)
        print(f"Generated header: {header_output}")
        write_output(impl_output, impl)
        print(f"Generated implementation: {impl_output}")

        return header, impl
