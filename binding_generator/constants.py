"""
Centralized constants for the binding generator.

This module contains the default configuration values, output file extensions
and reserved words shared by the generator core and its backends.
"""

from typing import FrozenSet


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    OUTPUT_DIR = "./generated_bindings"
    GENERATOR_KIND = "csharp"
    GENERATE_SINGLE_CSHARP_FILE = False
    EMPTY_OUTPUT_POLICY = "stop"


# =============================================================================
# NAMING
# =============================================================================

# Prefix for compiler-generated names that must never collide with user names
GENERATED_IDENTIFIER_PREFIX = "__"


class FileExtensions:
    """Output file extensions per backend."""

    CSHARP = "cs"
    CLI_HEADER = "h"
    CLI_SOURCE = "cpp"


# Appended to C++/CLI wrapper file names so a wrapper never shadows the native header it includes
CLI_WRAPPER_SUFFIX = "_cli"


# =============================================================================
# RESERVED WORDS
# =============================================================================

CSHARP_KEYWORDS: FrozenSet[str] = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params",
    "private", "protected", "public", "readonly", "ref", "return", "sbyte",
    "sealed", "short", "sizeof", "stackalloc", "static", "string", "struct",
    "switch", "this", "throw", "true", "try", "typeof", "uint", "ulong",
    "unchecked", "unsafe", "ushort", "using", "virtual", "void", "volatile",
    "while",
})

CLI_KEYWORDS: FrozenSet[str] = frozenset({
    "abstract", "delegate", "event", "finally", "gcnew", "generic", "initonly",
    "interface", "literal", "nullptr", "override", "property", "ref",
    "sealed", "value",
})
