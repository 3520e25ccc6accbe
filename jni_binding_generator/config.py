"""
XML configuration file parsing for JNI bindings generator
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class BindingTarget:
    """Request to bind one class, with optional member filters"""
    class_name: str
    filters: tuple[str, ...] = ()
    only_public: bool = False

    def excludes(self, key: str) -> bool:
        """True if ``key`` (field name, name+signature or signature) is filtered out"""
        return key in self.filters


@dataclass
class BindingConfig:
    """Configuration for JNI bindings generation"""
    header_output: str = ""
    impl_output: str = ""
    header_include: str | None = None
    classes_dir: str | None = None
    classpath: list[str] = field(default_factory=list)
    # Keyed by class name; a later entry for the same class replaces the earlier one
    structs: dict[str, BindingTarget] = field(default_factory=dict)
    exceptions: dict[str, BindingTarget] = field(default_factory=dict)
    builder: list[str] = field(default_factory=list)
    builder_dir: str | None = None

    def include_line(self) -> str:
        """``#include`` line placed at the top of the implementation unit"""
        include = self.header_include or Path(self.header_output).name
        if include.startswith("#"):
            return include
        return f'#include "{include}"'


def _resolve(base: Path, path: str) -> str:
    resolved = Path(path.strip())
    if not resolved.is_absolute():
        resolved = base / resolved
    return str(resolved)


def _parse_target(element, kind: str) -> BindingTarget:
    class_name = element.get("class")
    if not class_name or not class_name.strip():
        raise ValueError(f"{kind.capitalize()} element missing 'class' attribute")

    filters = []
    for filter_element in element.findall("filter"):
        text = (filter_element.text or "").strip()
        if not text:
            raise ValueError(f"Empty filter in {kind} '{class_name.strip()}'")
        filters.append(text)

    only_public = element.get("public", "false").strip().lower() == "true"
    return BindingTarget(class_name.strip(), tuple(filters), only_public)


def parse_config_file(config_path) -> BindingConfig:
    """Parse XML configuration file and return BindingConfig object

    Relative paths are resolved against the directory of the config file.
    """
    base = Path(config_path).resolve().parent
    try:
        tree = ET.parse(config_path)
        root = tree.getroot()

        if root.tag != "jnigenerator":
            raise ValueError(f"Expected root element 'jnigenerator', got '{root.tag}'")

        config = BindingConfig()

        header = root.get("header")
        impl = root.get("impl")
        if not header or not impl:
            raise ValueError("Root element missing 'header' or 'impl' attribute")
        config.header_output = _resolve(base, header)
        config.impl_output = _resolve(base, impl)

        include = root.get("include")
        if include is not None:
            config.header_include = include.strip()

        classes = root.find("classes")
        if classes is not None:
            path = classes.get("path")
            if not path:
                raise ValueError("Classes element missing 'path' attribute")
            config.classes_dir = _resolve(base, path)

        for classpath in root.findall("classpath"):
            path = classpath.get("path")
            if not path:
                raise ValueError("Classpath element missing 'path' attribute")
            config.classpath.append(_resolve(base, path))

        for struct in root.findall("struct"):
            target = _parse_target(struct, "struct")
            config.structs[target.class_name] = target

        for exception in root.findall("exception"):
            target = _parse_target(exception, "exception")
            config.exceptions[target.class_name] = target

        builder = root.find("builder")
        if builder is not None:
            config.builder = [(arg.text or "").strip() for arg in builder.findall("arg")]
            if not config.builder or not config.builder[0]:
                raise ValueError("Builder element needs at least one non-empty 'arg'")
            builder_dir = builder.get("dir")
            if builder_dir:
                config.builder_dir = _resolve(base, builder_dir)

        return config

    except ET.ParseError as e:
        raise ValueError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
