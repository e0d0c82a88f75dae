"""
Core domain models for the binding generator.

These models represent the parsed program handed over by the front end:
modules, translation units and the declarations they contain. The generator
core only reads them; AST passes may rename or ignore declarations.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .types import BuiltinType, PrimitiveType, Type


@dataclass
class Declaration:
    """A named declaration inside a translation unit."""

    name: str
    is_generated: bool = True
    original_name: Optional[str] = None

    def __post_init__(self):
        if self.original_name is None:
            self.original_name = self.name

    @property
    def kind(self) -> str:
        return type(self).__name__.lower()

    def rename(self, new_name: str) -> None:
        """Rename the declaration, keeping the name it was parsed with."""
        self.name = new_name


@dataclass
class Field(Declaration):
    type: Optional[Type] = None


@dataclass
class Parameter(Declaration):
    type: Optional[Type] = None


@dataclass
class Class(Declaration):
    fields: List[Field] = field(default_factory=list)
    is_struct: bool = False


@dataclass
class Function(Declaration):
    return_type: Type = field(default_factory=lambda: BuiltinType(PrimitiveType.VOID))
    parameters: List[Parameter] = field(default_factory=list)


@dataclass
class Enumeration(Declaration):
    items: List[str] = field(default_factory=list)


@dataclass(eq=False)
class TranslationUnit:
    """
    One parsed source file and its declarations.

    Units compare by identity: two parsed files with the same path are still
    different units.
    """

    file_path: str
    module: Optional["Module"] = None
    declarations: List[Declaration] = field(default_factory=list)
    is_generated: bool = True
    is_system_header: bool = False
    is_valid: bool = True
    is_synthetic: bool = False

    @classmethod
    def synthetic(cls, file_path: str, module: "Module") -> "TranslationUnit":
        """Carrier unit for a module-wide output; it corresponds to no parsed file."""
        return cls(file_path=file_path, module=module, is_synthetic=True)

    @property
    def has_declarations(self) -> bool:
        return bool(self.declarations)

    @property
    def file_name(self) -> str:
        return os.path.basename(self.file_path)

    @property
    def file_stem(self) -> str:
        return os.path.splitext(self.file_name)[0]

    @property
    def include_dir(self) -> str:
        return os.path.dirname(self.file_path)

    @property
    def generated_declarations(self) -> List[Declaration]:
        return [decl for decl in self.declarations if decl.is_generated]

    def __repr__(self) -> str:
        module_name = self.module.library_name if self.module else None
        return f"TranslationUnit(file_path={self.file_path!r}, module={module_name!r})"


@dataclass(eq=False)
class Module:
    """A named group of translation units sharing an output namespace and library name."""

    library_name: str
    output_namespace: Optional[str] = None
    units: List[TranslationUnit] = field(default_factory=list)

    def __post_init__(self):
        if not self.library_name:
            raise ValueError("Module library_name cannot be empty")
        for unit in self.units:
            unit.module = self

    def add_unit(self, unit: TranslationUnit) -> TranslationUnit:
        unit.module = self
        self.units.append(unit)
        return unit

    @property
    def has_output_namespace(self) -> bool:
        return bool(self.output_namespace)

    def __repr__(self) -> str:
        return (
            f"Module(library_name={self.library_name!r}, "
            f"output_namespace={self.output_namespace!r}, units={len(self.units)})"
        )


@dataclass
class ASTContext:
    """Ordered collection of every translation unit known to the driver."""

    translation_units: List[TranslationUnit] = field(default_factory=list)

    def add_unit(self, unit: TranslationUnit) -> TranslationUnit:
        self.translation_units.append(unit)
        return unit

    def find_unit(self, file_path: str) -> Optional[TranslationUnit]:
        for unit in self.translation_units:
            if unit.file_path == file_path:
                return unit
        return None

    @classmethod
    def from_modules(cls, modules: List[Module]) -> "ASTContext":
        return cls(translation_units=[unit for module in modules for unit in module.units])
