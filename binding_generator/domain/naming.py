"""
Naming conventions for generated code and output files.
"""

from ..constants import GENERATED_IDENTIFIER_PREFIX
from .models import Module


def generated_identifier(id: str) -> str:
    """
    Reserved synthetic identifier for compiler-generated names.

    Examples:
        foo -> __foo
        params -> __params
    """
    return GENERATED_IDENTIFIER_PREFIX + id


def is_generated_identifier(name: str) -> bool:
    return isinstance(name, str) and name.startswith(GENERATED_IDENTIFIER_PREFIX)


def output_file_name(module: Module, extension: str) -> str:
    """
    File name of a module-wide output: the output namespace, or the library
    name when the module has no namespace.
    """
    base_name = module.output_namespace if module.has_output_namespace else module.library_name
    return f"{base_name}.{extension}"
