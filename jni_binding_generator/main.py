#!/usr/bin/env python3
"""
CLI entry point for JNI bindings generator
Generates C glue code that caches JNI handles and wraps fields, methods and exceptions
"""

import argparse
import os
import subprocess
import sys

# Add parent directory to sys.path for direct execution
if __name__ == '__main__' and __package__ is None:
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jni_binding_generator.config import parse_config_file
from jni_binding_generator.generator import JNIBindingsGenerator
from jni_binding_generator.provider import DescriptorProvider


class BuildError(RuntimeError):
    """Raised when the post-generation build command fails"""


def run_builder(command: list[str], cwd: str | None = None):
    """Run the build command with inherited stdio; a non-zero exit is fatal"""
    if not command:
        return

    print(f"Running builder: {' '.join(command)}")
    try:
        result = subprocess.run(command, cwd=cwd)
    except OSError as e:
        raise BuildError(f"Builder process could not be started: {e}") from e

    if result.returncode != 0:
        raise BuildError(f"Builder process exited with value {result.returncode}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate JNI C bindings from class descriptors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --config jnigen.xml
  %(prog)s -C jnigen.xml --classes build/descriptors --classpath /opt/jdk-descriptors --no-build
        """
    )

    parser.add_argument(
        "-C", "--config",
        metavar="CONFIG_FILE",
        required=True,
        help="XML configuration file specifying bindings to generate"
    )

    parser.add_argument(
        "--header",
        metavar="FILE",
        help="Output path of the generated header (overrides the config file)"
    )

    parser.add_argument(
        "--impl",
        metavar="FILE",
        help="Output path of the generated implementation (overrides the config file)"
    )

    parser.add_argument(
        "--classes",
        metavar="DIRECTORY",
        help="Directory with descriptor files of the project's classes (overrides the config file)"
    )

    parser.add_argument(
        "--classpath",
        metavar="DIRECTORY",
        action="append",
        help="Directory searched for descriptors not found in the classes directory (repeatable)"
    )

    parser.add_argument(
        "--no-build",
        action="store_true",
        help="Do not run the builder command after generation"
    )

    args = parser.parse_args(argv)

    try:
        config = parse_config_file(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error reading config file: {e}", file=sys.stderr)
        sys.exit(1)

    if args.header:
        config.header_output = args.header
    if args.impl:
        config.impl_output = args.impl
    if args.classes:
        config.classes_dir = args.classes
    if args.classpath:
        config.classpath = args.classpath

    if not config.structs and not config.exceptions:
        print("Warning: No struct or exception classes in config file", file=sys.stderr)

    try:
        provider = DescriptorProvider(config.classes_dir, config.classpath)
        generator = JNIBindingsGenerator(provider)
        generator.generate_files(
            config.structs,
            config.exceptions,
            header_output=config.header_output,
            impl_output=config.impl_output,
            include_line=config.include_line(),
        )

        if not args.no_build:
            run_builder(config.builder, config.builder_dir)
    except Exception as e:
        import traceback
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
