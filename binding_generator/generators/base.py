"""
Generator core: the lifecycle shared by every language backend.

A backend subclasses ``Generator`` and implements ``setup_passes``,
``generate_units`` and ``type_printer_delegate``. The driver calls
``setup_passes()``, ``process()`` and ``generate()`` in that order; the
aggregation strategy selected by the driver options turns the eligible
translation units into ``GeneratorOutput`` records.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from ..domain.models import Module, TranslationUnit
from ..domain.naming import generated_identifier
from ..domain.types import TYPE_PRINTERS, Type
from .aggregation import AggregationMode, AggregationStrategyFactory
from .outputs import GenerationContext, GeneratorKind, GeneratorOutput
from .templates import Template

logger = logging.getLogger(__name__)


UnitGeneratedCallback = Callable[[GeneratorOutput], None]


def _ignore_output(output: GeneratorOutput) -> None:
    pass


class Generator(ABC):
    """
    Base class for each language backend.

    The type-printer delegate is subscribed to ``TYPE_PRINTERS`` while the
    generator is open (``with generator:`` or ``open()``/``close()``) and for
    the duration of each ``generate()`` pass.
    """

    kind: GeneratorKind
    file_extension: str = ""
    supports_single_file: bool = False

    def __init__(self, driver):
        if driver is None:
            raise ValueError(f"{type(self).__name__} requires a driver")
        self._driver = driver
        self._is_open = False
        self.on_unit_generated: UnitGeneratedCallback = _ignore_output

    @property
    def driver(self):
        return self._driver

    @property
    def options(self):
        return self._driver.options

    @property
    def is_open(self) -> bool:
        return self._is_open

    # --- Scope of the type-printer subscription ---

    def open(self) -> "Generator":
        if not self._is_open:
            TYPE_PRINTERS.subscribe(self.type_printer_delegate)
            self._is_open = True
        return self

    def close(self) -> None:
        """Release the type-printer subscription. Safe to call more than once."""
        if self._is_open:
            TYPE_PRINTERS.unsubscribe(self.type_printer_delegate)
            self._is_open = False

    def __enter__(self) -> "Generator":
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    # --- Extensibility hooks ---

    @abstractmethod
    def setup_passes(self) -> bool:
        """Register generator-specific AST passes. Returns False when setup failed."""

    def process(self) -> None:
        """Generator-specific processing before any unit is generated."""

    @abstractmethod
    def generate_units(self, units: Sequence[TranslationUnit], context: GenerationContext) -> List[Template]:
        """Return the templates to emit for ``units``. Must be deterministic."""

    @abstractmethod
    def type_printer_delegate(self, type_: Type) -> str:
        """Spell ``type_`` in the backend's language."""

    # --- Generation ---

    @staticmethod
    def is_eligible(unit: TranslationUnit) -> bool:
        return (
            unit.is_generated and unit.has_declarations
            and not unit.is_system_header and unit.is_valid
        )

    def eligible_units(self) -> List[TranslationUnit]:
        return [unit for unit in self._driver.ast_context.translation_units if self.is_eligible(unit)]

    def create_context(
        self,
        output_namespace: Optional[str],
        module: Optional[Module] = None,
        include_dir: Optional[str] = None,
    ) -> GenerationContext:
        return GenerationContext(
            output_namespace=output_namespace or "",
            type_printer=self.type_printer_delegate,
            module=module,
            include_dir=include_dir,
        )

    def aggregation_mode(self) -> AggregationMode:
        """Single-file aggregation only when requested and supported by this backend."""
        if self.supports_single_file and self.options.aggregation_mode is AggregationMode.SINGLE_FILE:
            return AggregationMode.SINGLE_FILE
        return AggregationMode.PER_UNIT

    def generate(self) -> List[GeneratorOutput]:
        """Generate the outputs of every eligible unit, in production order."""
        units = self.eligible_units()
        strategy = AggregationStrategyFactory.create(
            self.aggregation_mode(),
            empty_output_policy=self.options.empty_output_policy,
        )
        logger.debug(
            f"{type(self).__name__}: {len(units)} eligible unit(s), "
            f"{type(strategy).__name__} aggregation"
        )

        with TYPE_PRINTERS.installed(self.type_printer_delegate):
            return strategy.aggregate(self, units)

    @staticmethod
    def generated_identifier(id: str) -> str:
        return generated_identifier(id)
