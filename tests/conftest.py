# File: tests/conftest.py
# Contains pytest fixtures shared by the generator, backend and driver tests.

from typing import Callable, Dict, List, Optional, Sequence

import pytest

from binding_generator.domain.models import (
    Class,
    Enumeration,
    Field,
    Function,
    Module,
    Parameter,
    TranslationUnit,
)
from binding_generator.domain.types import TYPE_PRINTERS, Type, parse_type
from binding_generator.driver import Driver, DriverOptions
from binding_generator.generators.base import Generator
from binding_generator.generators.outputs import GenerationContext, GeneratorKind
from binding_generator.generators.templates import Template


class StaticTemplate(Template):
    """Template rendering a fixed marker; counts how often it was processed."""

    file_extension = "txt"

    def __init__(self, units, context, label: str = ""):
        super().__init__(units, context)
        self.label = label
        self.render_calls = 0

    def render(self) -> str:
        self.render_calls += 1
        return f"{self.label} ns={self.context.output_namespace}"


class RecordingGenerator(Generator):
    """
    Test backend. ``template_counts`` maps a unit's file path to the number of
    templates to return for it (default 1); every call is recorded.
    """

    kind = GeneratorKind.CSHARP
    file_extension = "cs"
    supports_single_file = True

    def __init__(self, driver, template_counts: Optional[Dict[str, int]] = None):
        super().__init__(driver)
        self.template_counts = template_counts or {}
        self.calls: List[Sequence[TranslationUnit]] = []
        self.contexts: List[GenerationContext] = []
        self.setup_result = True

    def setup_passes(self) -> bool:
        return self.setup_result

    def generate_units(self, units, context):
        self.calls.append(list(units))
        self.contexts.append(context)
        if len(units) == 1:
            count = self.template_counts.get(units[0].file_path, 1)
        else:
            count = self.template_counts.get("*", 1)
        label = "+".join(unit.file_path for unit in units)
        return [StaticTemplate(units, context, label=f"{label}#{i}") for i in range(count)]

    def type_printer_delegate(self, type_: Type) -> str:
        return f"rec:{type_.spelling()}"


def _unit(file_path: str, **flags) -> TranslationUnit:
    declarations = flags.pop("declarations", None)
    if declarations is None:
        declarations = [Class(name=file_path.rsplit("/", 1)[-1].split(".")[0].capitalize())]
    return TranslationUnit(file_path=file_path, declarations=declarations, **flags)


@pytest.fixture(autouse=True)
def clean_type_printers():
    """Every test starts and ends with no subscribed type printer."""
    TYPE_PRINTERS._delegates.clear()
    yield
    TYPE_PRINTERS._delegates.clear()


@pytest.fixture
def make_unit() -> Callable[..., TranslationUnit]:
    return _unit


@pytest.fixture
def make_module() -> Callable[..., Module]:
    def factory(library_name: str, output_namespace: Optional[str] = None, paths: Sequence[str] = ()) -> Module:
        module = Module(library_name=library_name, output_namespace=output_namespace)
        for path in paths:
            module.add_unit(_unit(path))
        return module
    return factory


@pytest.fixture
def make_driver() -> Callable[..., Driver]:
    def factory(modules: List[Module], **options) -> Driver:
        return Driver(DriverOptions(modules=modules, **options))
    return factory


@pytest.fixture
def recording_generator() -> Callable[..., RecordingGenerator]:
    def factory(driver: Driver, template_counts: Optional[Dict[str, int]] = None) -> RecordingGenerator:
        return RecordingGenerator(driver, template_counts)
    return factory


@pytest.fixture
def shapes_module() -> Module:
    """A module with a class, an enum and a function using a C# keyword as parameter name."""
    module = Module(library_name="shapes", output_namespace="Acme.Shapes")
    module.add_unit(TranslationUnit(
        file_path="include/shapes.h",
        declarations=[
            Class(name="Circle", fields=[Field(name="radius", type=parse_type("double"))]),
            Enumeration(name="Color", items=["Red", "Green"]),
            Function(
                name="circle_area",
                return_type=parse_type("double"),
                parameters=[Parameter(name="params", type=parse_type("const Circle*"))],
            ),
        ],
    ))
    return module
