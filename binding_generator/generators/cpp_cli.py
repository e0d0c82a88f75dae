"""
C++/CLI backend: a managed wrapper header and source file per unit.
"""

import logging
from typing import List, Sequence

from ..constants import CLI_KEYWORDS, CLI_WRAPPER_SUFFIX, FileExtensions
from ..domain.models import TranslationUnit
from ..domain.types import ArrayType, BuiltinType, PointerType, PrimitiveType, TagType, Type
from ..passes import IgnoreUnnamedDeclarationsPass, RenameReservedKeywordsPass
from .base import Generator
from .outputs import GenerationContext, GeneratorKind
from .templates import JinjaTemplate, Template

logger = logging.getLogger(__name__)


class CLIHeaderTemplate(JinjaTemplate):
    file_extension = FileExtensions.CLI_HEADER
    file_name_suffix = CLI_WRAPPER_SUFFIX
    template_name = "cli_header.h.j2"


class CLISourceTemplate(JinjaTemplate):
    file_extension = FileExtensions.CLI_SOURCE
    file_name_suffix = CLI_WRAPPER_SUFFIX
    template_name = "cli_source.cpp.j2"


class CLIGenerator(Generator):
    kind = GeneratorKind.CLI
    file_extension = FileExtensions.CLI_HEADER

    def setup_passes(self) -> bool:
        self.driver.passes.add(IgnoreUnnamedDeclarationsPass())
        self.driver.passes.add(RenameReservedKeywordsPass(CLI_KEYWORDS))
        return True

    def generate_units(self, units: Sequence[TranslationUnit], context: GenerationContext) -> List[Template]:
        if not any(unit.generated_declarations for unit in units):
            return []
        return [CLIHeaderTemplate(units, context), CLISourceTemplate(units, context)]

    def type_printer_delegate(self, type_: Type) -> str:
        if isinstance(type_, BuiltinType):
            return type_.primitive.value
        if isinstance(type_, TagType):
            return type_.name
        if isinstance(type_, ArrayType):
            return f"cli::array<{self.type_printer_delegate(type_.element)}>^"
        if isinstance(type_, PointerType):
            pointee = type_.pointee
            if isinstance(pointee, BuiltinType) and pointee.primitive in (PrimitiveType.CHAR, PrimitiveType.WCHAR):
                return "System::String^"
            if isinstance(pointee, TagType):
                return f"{pointee.name}^"
            return f"{self.type_printer_delegate(pointee)}*"
        raise TypeError(f"Cannot print type {type_!r} for C++/CLI")
