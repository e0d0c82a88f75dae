"""
C# backend: P/Invoke bindings, one ``.cs`` file per unit or per module.
"""

import logging
from typing import List, Sequence

from ..constants import CSHARP_KEYWORDS, FileExtensions
from ..domain.models import TranslationUnit
from ..domain.types import ArrayType, BuiltinType, PointerType, PrimitiveType, TagType, Type
from ..passes import IgnoreUnnamedDeclarationsPass, RenameReservedKeywordsPass
from .aggregation import AggregationMode
from .base import Generator
from .outputs import GenerationContext, GeneratorKind
from .templates import JinjaTemplate, Template

logger = logging.getLogger(__name__)


CSHARP_PRIMITIVES = {
    PrimitiveType.VOID: "void",
    PrimitiveType.BOOL: "bool",
    PrimitiveType.CHAR: "sbyte",
    PrimitiveType.SCHAR: "sbyte",
    PrimitiveType.UCHAR: "byte",
    PrimitiveType.SHORT: "short",
    PrimitiveType.USHORT: "ushort",
    PrimitiveType.INT: "int",
    PrimitiveType.UINT: "uint",
    PrimitiveType.LONG: "int",
    PrimitiveType.ULONG: "uint",
    PrimitiveType.LONGLONG: "long",
    PrimitiveType.ULONGLONG: "ulong",
    PrimitiveType.FLOAT: "float",
    PrimitiveType.DOUBLE: "double",
    PrimitiveType.WCHAR: "char",
}


class CSharpSourcesTemplate(JinjaTemplate):
    file_extension = FileExtensions.CSHARP
    template_name = "csharp_sources.cs.j2"


class CSharpGenerator(Generator):
    kind = GeneratorKind.CSHARP
    file_extension = FileExtensions.CSHARP
    supports_single_file = True

    def setup_passes(self) -> bool:
        self.driver.passes.add(IgnoreUnnamedDeclarationsPass())
        self.driver.passes.add(RenameReservedKeywordsPass(CSHARP_KEYWORDS))
        return True

    def generate_units(self, units: Sequence[TranslationUnit], context: GenerationContext) -> List[Template]:
        # Module-wide calls receive every unit of the module
        units = [unit for unit in units if self.is_eligible(unit)]
        if self.aggregation_mode() is AggregationMode.SINGLE_FILE:
            # Exactly one file per module, even when nothing in it is generated
            return [CSharpSourcesTemplate(units, context)]
        if not any(unit.generated_declarations for unit in units):
            return []
        return [CSharpSourcesTemplate(units, context)]

    def type_printer_delegate(self, type_: Type) -> str:
        if isinstance(type_, BuiltinType):
            return CSHARP_PRIMITIVES[type_.primitive]
        if isinstance(type_, TagType):
            return type_.name
        if isinstance(type_, ArrayType):
            return f"{self.type_printer_delegate(type_.element)}[]"
        if isinstance(type_, PointerType):
            pointee = type_.pointee
            if isinstance(pointee, BuiltinType) and pointee.primitive in (PrimitiveType.CHAR, PrimitiveType.WCHAR):
                return "string"
            if isinstance(pointee, TagType):
                return f"ref {pointee.name}" if type_.is_reference else pointee.name
            return "global::System.IntPtr"
        raise TypeError(f"Cannot print type {type_!r} for C#")
