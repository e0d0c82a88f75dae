"""
Factory for creating language backends from their ``GeneratorKind``.
"""

from typing import Dict, Type

from ..exceptions import ConfigurationError
from .base import Generator
from .cpp_cli import CLIGenerator
from .csharp import CSharpGenerator
from .outputs import GeneratorKind


class GeneratorFactory:
    """Factory for creating generator backends"""

    _registry: Dict[GeneratorKind, Type[Generator]] = {
        GeneratorKind.CLI: CLIGenerator,
        GeneratorKind.CSHARP: CSharpGenerator,
    }

    @classmethod
    def register(cls, kind: GeneratorKind, generator_class: Type[Generator]) -> None:
        """Register a backend for a generator kind"""
        cls._registry[kind] = generator_class

    @classmethod
    def create(cls, kind: GeneratorKind, driver) -> Generator:
        """Create the backend for a generator kind, bound to ``driver``"""
        generator_class = cls._registry.get(kind)
        if not generator_class:
            raise ConfigurationError(
                f"Unknown generator kind: {kind}",
                context={"supported_kinds": [k.value for k in cls._registry]},
            )
        return generator_class(driver)
