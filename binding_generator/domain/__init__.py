"""
Domain module for the binding generator.

This module contains the parsed-program models consumed by the generator
core, the type nodes with their printer extension point, and naming helpers.
"""

from .models import (
    ASTContext,
    Class,
    Declaration,
    Enumeration,
    Field,
    Function,
    Module,
    Parameter,
    TranslationUnit,
)

from .types import (
    ArrayType,
    BuiltinType,
    PointerType,
    PrimitiveType,
    TagType,
    Type,
    TypePrinter,
    TypePrinterRegistry,
    TYPE_PRINTERS,
    parse_type,
)

from .naming import (
    generated_identifier,
    is_generated_identifier,
    output_file_name,
)

__all__ = [
    # Models
    'ASTContext',
    'Class',
    'Declaration',
    'Enumeration',
    'Field',
    'Function',
    'Module',
    'Parameter',
    'TranslationUnit',

    # Types
    'ArrayType',
    'BuiltinType',
    'PointerType',
    'PrimitiveType',
    'TagType',
    'Type',
    'TypePrinter',
    'TypePrinterRegistry',
    'TYPE_PRINTERS',
    'parse_type',

    # Naming
    'generated_identifier',
    'is_generated_identifier',
    'output_file_name',
]
