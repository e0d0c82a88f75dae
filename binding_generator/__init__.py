"""
Multi-backend binding generator.

Turns parsed translation units into C# or C++/CLI source files through
pluggable generator backends.
"""

from .driver import Driver, DriverOptions, OutputWriter
from .generators import (
    AggregationMode,
    EmptyOutputPolicy,
    Generator,
    GeneratorFactory,
    GeneratorKind,
    GeneratorOutput,
    GenerationContext,
    Template,
)

__version__ = "0.1.0"

__all__ = [
    'Driver',
    'DriverOptions',
    'OutputWriter',
    'AggregationMode',
    'EmptyOutputPolicy',
    'Generator',
    'GeneratorFactory',
    'GeneratorKind',
    'GeneratorOutput',
    'GenerationContext',
    'Template',
]
