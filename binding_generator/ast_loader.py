"""
Builds the parsed-program AST from YAML unit descriptions.

A unit description looks like::

    file_path: include/shapes.h
    is_system_header: false
    declarations:
      - kind: class
        name: Circle
        fields:
          - {name: radius, type: double}
      - kind: function
        name: circle_area
        return_type: double
        parameters:
          - {name: circle, type: "const Circle*"}
      - kind: enum
        name: Color
        items: [Red, Green, Blue]

Descriptions are given inline in the configuration or as paths to YAML files
relative to the configuration file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .config_validation import GeneratorConfigSchema, ModuleSettings
from .domain.models import (
    ASTContext,
    Class,
    Declaration,
    Enumeration,
    Field,
    Function,
    Module,
    Parameter,
    TranslationUnit,
)
from .domain.types import parse_type
from .exceptions import ASTLoadError

logger = logging.getLogger(__name__)

UnitSource = Union[str, Dict[str, Any]]


def _require(mapping: Dict[str, Any], key: str, source: str) -> Any:
    if key not in mapping or mapping[key] in (None, ""):
        raise ASTLoadError(f"Missing required key '{key}' in {mapping!r}", source=source)
    return mapping[key]


def _parse_type_field(mapping: Dict[str, Any], key: str, source: str, default: Optional[str] = None):
    spelling = mapping.get(key, default)
    if spelling is None:
        raise ASTLoadError(f"Missing type '{key}' in {mapping!r}", source=source)
    try:
        return parse_type(str(spelling))
    except ValueError as e:
        raise ASTLoadError(str(e), source=source) from e


def _load_field(data: Dict[str, Any], source: str) -> Field:
    return Field(name=_require(data, "name", source), type=_parse_type_field(data, "type", source))


def _load_parameter(data: Dict[str, Any], source: str) -> Parameter:
    return Parameter(name=_require(data, "name", source), type=_parse_type_field(data, "type", source))


def load_declaration(data: Dict[str, Any], source: str) -> Declaration:
    """Build one declaration from its description."""
    if not isinstance(data, dict):
        raise ASTLoadError(f"Declaration must be a mapping, got {type(data).__name__}", source=source)

    kind = _require(data, "kind", source)
    # Unnamed declarations are kept; a pass decides whether to generate them
    name = data.get("name") or ""
    is_generated = bool(data.get("generate", True))

    if kind in ("class", "struct"):
        return Class(
            name=name,
            is_generated=is_generated,
            is_struct=(kind == "struct"),
            fields=[_load_field(item, source) for item in data.get("fields") or []],
        )
    if kind == "function":
        return Function(
            name=name,
            is_generated=is_generated,
            return_type=_parse_type_field(data, "return_type", source, default="void"),
            parameters=[_load_parameter(item, source) for item in data.get("parameters") or []],
        )
    if kind == "enum":
        return Enumeration(
            name=name,
            is_generated=is_generated,
            items=[str(item) for item in data.get("items") or []],
        )
    raise ASTLoadError(f"Unknown declaration kind '{kind}'", source=source)


def load_unit(data: Dict[str, Any], source: str) -> TranslationUnit:
    """Build a translation unit from its description."""
    if not isinstance(data, dict):
        raise ASTLoadError(f"Unit description must be a mapping, got {type(data).__name__}", source=source)

    return TranslationUnit(
        file_path=str(_require(data, "file_path", source)),
        declarations=[load_declaration(item, source) for item in data.get("declarations") or []],
        is_generated=bool(data.get("is_generated", True)),
        is_system_header=bool(data.get("is_system_header", False)),
        is_valid=bool(data.get("is_valid", True)),
    )


def read_unit_source(unit_source: UnitSource, base_dir: Path) -> Tuple[Dict[str, Any], str]:
    """Return the description mapping and a label for error messages."""
    if isinstance(unit_source, dict):
        return unit_source, "<inline>"

    path = Path(unit_source)
    if not path.is_absolute():
        path = base_dir / path
    if not path.is_file():
        raise ASTLoadError(f"Unit description not found: {path}", source=str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ASTLoadError(f"Error parsing YAML file {path}: {e}", source=str(path)) from e
    return data, str(path)


def load_module(settings: ModuleSettings, base_dir: Path) -> Module:
    module = Module(library_name=settings.library_name, output_namespace=settings.output_namespace)
    for unit_source in settings.units:
        data, source = read_unit_source(unit_source, base_dir)
        module.add_unit(load_unit(data, source))
    logger.debug(f"Loaded module '{module.library_name}' with {len(module.units)} unit(s)")
    return module


def load_ast(config: GeneratorConfigSchema) -> Tuple[List[Module], ASTContext]:
    """Load every configured module and the AST context holding their units."""
    base_dir = Path(config.base_dir) if config.base_dir else Path.cwd()
    modules = [load_module(settings, base_dir) for settings in config.modules]
    return modules, ASTContext.from_modules(modules)
