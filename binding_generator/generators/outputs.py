"""
Records exchanged between the generator core, its backends and the driver.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..domain.models import Module, TranslationUnit
from ..domain.types import TypePrinter
from .templates import Template


class GeneratorKind(Enum):
    """Kinds of language generators."""

    CLI = "cli"
    CSHARP = "csharp"


@dataclass(frozen=True)
class GeneratorOutput:
    """Output generated by a backend for one translation unit (or one module)."""

    translation_unit: TranslationUnit
    templates: Tuple[Template, ...]

    def __post_init__(self):
        # Accept any sequence but store it immutably
        object.__setattr__(self, "templates", tuple(self.templates))


@dataclass(frozen=True)
class GenerationContext:
    """
    Everything a backend call needs to know about the output being produced.

    ``output_namespace`` is the namespace qualified names resolve against and
    ``type_printer`` spells types in the backend's language.
    """

    output_namespace: str
    type_printer: TypePrinter
    module: Optional[Module] = None
    include_dir: Optional[str] = None
