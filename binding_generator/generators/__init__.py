"""
Generator core and language backends.

This package provides the generator lifecycle, the aggregation strategies
mapping translation units to outputs, and the reference C# and C++/CLI
backends.
"""

from .aggregation import (
    AggregationMode,
    AggregationStrategy,
    AggregationStrategyFactory,
    EmptyOutputPolicy,
    PerUnitAggregation,
    SingleFileAggregation,
)
from .base import Generator
from .cpp_cli import CLIGenerator
from .csharp import CSharpGenerator
from .factory import GeneratorFactory
from .outputs import GenerationContext, GeneratorKind, GeneratorOutput
from .templates import JinjaTemplate, Template


__all__ = [
    'AggregationMode',
    'AggregationStrategy',
    'AggregationStrategyFactory',
    'EmptyOutputPolicy',
    'PerUnitAggregation',
    'SingleFileAggregation',
    'Generator',
    'CLIGenerator',
    'CSharpGenerator',
    'GeneratorFactory',
    'GenerationContext',
    'GeneratorKind',
    'GeneratorOutput',
    'JinjaTemplate',
    'Template',
]
