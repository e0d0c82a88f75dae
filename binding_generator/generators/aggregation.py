"""
Aggregation strategies: how a set of eligible translation units maps to
output files.

``PerUnitAggregation`` produces one output per translation unit,
``SingleFileAggregation`` one output per configured module.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Sequence, Type

from ..domain.models import TranslationUnit
from ..domain.naming import output_file_name
from ..exceptions import BackendContractError, EmptyOutputError
from .outputs import GeneratorOutput

logger = logging.getLogger(__name__)


class AggregationMode(Enum):
    """Output layout of a generation pass."""

    PER_UNIT = "per_unit"
    SINGLE_FILE = "single_file"


class EmptyOutputPolicy(Enum):
    """What per-unit aggregation does when a backend returns no templates for a unit."""

    STOP = "stop"    # end the batch: no output for this unit or any later one
    SKIP = "skip"    # no output for this unit, continue with the next
    RAISE = "raise"  # raise EmptyOutputError


class AggregationStrategy(ABC):
    """Abstract strategy turning eligible units into generator outputs."""

    def __init__(self, empty_output_policy: EmptyOutputPolicy = EmptyOutputPolicy.STOP):
        self.empty_output_policy = EmptyOutputPolicy(empty_output_policy)

    @abstractmethod
    def aggregate(self, generator, units: Sequence[TranslationUnit]) -> List[GeneratorOutput]:
        """Generate, finalize and report the outputs for ``units``."""

    @staticmethod
    def _emit(generator, outputs: List[GeneratorOutput], output: GeneratorOutput) -> None:
        outputs.append(output)
        generator.on_unit_generated(output)


class PerUnitAggregation(AggregationStrategy):
    """One output per translation unit, in input order."""

    def aggregate(self, generator, units: Sequence[TranslationUnit]) -> List[GeneratorOutput]:
        outputs: List[GeneratorOutput] = []

        for unit in units:
            module = unit.module
            context = generator.create_context(
                module.output_namespace if module else None,
                module=module,
                include_dir=unit.include_dir,
            )
            templates = generator.generate_units([unit], context)

            if not templates:
                if self._handle_empty_output(generator, unit):
                    continue
                break

            for template in templates:
                template.process()

            self._emit(generator, outputs, GeneratorOutput(unit, templates))
            logger.debug(f"Generated {len(templates)} template(s) for {unit.file_path}")

        return outputs

    def _handle_empty_output(self, generator, unit: TranslationUnit) -> bool:
        """Apply the empty-output policy; return True to continue with the next unit."""
        backend = type(generator).__name__
        if self.empty_output_policy is EmptyOutputPolicy.RAISE:
            raise EmptyOutputError(
                f"{backend} produced no templates for '{unit.file_path}'",
                backend=backend,
                unit=unit.file_path,
            )
        if self.empty_output_policy is EmptyOutputPolicy.SKIP:
            logger.warning(f"{backend} produced no templates for '{unit.file_path}', skipping it")
            return True
        logger.warning(
            f"{backend} produced no templates for '{unit.file_path}', "
            f"stopping generation of the remaining units"
        )
        return False


class SingleFileAggregation(AggregationStrategy):
    """One output per configured module, collapsing all of its units into one template."""

    def aggregate(self, generator, units: Sequence[TranslationUnit]) -> List[GeneratorOutput]:
        outputs: List[GeneratorOutput] = []
        backend = type(generator).__name__

        for module in generator.options.modules:
            context = generator.create_context(module.output_namespace, module=module)
            file_path = output_file_name(module, generator.file_extension)

            templates = generator.generate_units(module.units, context)
            if len(templates) != 1:
                raise BackendContractError(
                    f"{backend} must return exactly one template per module in single-file mode, "
                    f"got {len(templates)} for module '{module.library_name}'",
                    expected="exactly 1",
                    actual=len(templates),
                    backend=backend,
                    unit=file_path,
                )

            templates[0].process()

            unit = TranslationUnit.synthetic(file_path, module)
            self._emit(generator, outputs, GeneratorOutput(unit, templates))
            logger.debug(f"Generated {file_path} from {len(module.units)} unit(s)")

        return outputs


class AggregationStrategyFactory:
    """Factory for creating aggregation strategies"""

    _registry: Dict[AggregationMode, Type[AggregationStrategy]] = {
        AggregationMode.PER_UNIT: PerUnitAggregation,
        AggregationMode.SINGLE_FILE: SingleFileAggregation,
    }

    @classmethod
    def register(cls, mode: AggregationMode, strategy_class: Type[AggregationStrategy]) -> None:
        """Register a strategy for an aggregation mode"""
        cls._registry[mode] = strategy_class

    @classmethod
    def create(cls, mode: AggregationMode, **kwargs) -> AggregationStrategy:
        """Create the strategy for an aggregation mode"""
        strategy_class = cls._registry.get(AggregationMode(mode))
        if not strategy_class:
            raise ValueError(f"Unknown aggregation mode: {mode}")
        return strategy_class(**kwargs)
