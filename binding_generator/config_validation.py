"""
Configuration loading and validation.

The configuration is read from YAML, overridden by explicitly given CLI
arguments and validated against ``GeneratorConfigSchema``.
"""

import logging
import re
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Self, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import DefaultConfig
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_NAMESPACE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def is_valid_namespace(name: str) -> bool:
    """Check a dotted namespace such as ``Acme.Native.Bindings``."""
    return isinstance(name, str) and bool(_NAMESPACE_RE.match(name))


# --- Pydantic Models for Configuration Schema ---

class ModuleSettings(BaseModel):
    """Schema for one module: its identity and the translation units it owns."""

    library_name: str = Field(
        ...,
        min_length=1,
        description="Name of the native library the module binds (e.g. 'zlib').",
    )
    output_namespace: Optional[str] = Field(
        default=None,
        description="Namespace of the generated code. Falls back to library_name for file naming.",
    )
    units: List[Union[str, Dict[str, Any]]] = Field(
        default_factory=list,
        description="Translation unit descriptions: paths to YAML files or inline mappings.",
    )

    @field_validator("output_namespace")
    @classmethod
    def check_namespace(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        if not is_valid_namespace(v):
            raise ValueError(f"'{v}' is not a valid dotted namespace.")
        return v


class GeneratorConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    generator_kind: Literal["cli", "csharp"] = Field(
        default=DefaultConfig.GENERATOR_KIND,
        description="Backend to run ('cli' or 'csharp').",
    )
    output_dir: Optional[str] = Field(
        default=DefaultConfig.OUTPUT_DIR,
        description="Directory the generated files are written to. Empty disables writing.",
    )
    generate_single_csharp_file: bool = Field(
        default=DefaultConfig.GENERATE_SINGLE_CSHARP_FILE,
        description="Generate one C# file per module instead of one per translation unit.",
    )
    empty_output_policy: Literal["stop", "skip", "raise"] = Field(
        default=DefaultConfig.EMPTY_OUTPUT_POLICY,
        description="What to do when a backend produces nothing for a unit.",
    )
    modules: List[ModuleSettings] = Field(
        ...,
        min_length=1,
        description="Modules to generate, in output order.",
    )

    # Directory unit paths are resolved against; set by load_config
    base_dir: Optional[str] = Field(default=None, exclude=True)

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    @model_validator(mode="after")
    def check_modules(self) -> Self:
        """Perform cross-field validation checks."""
        seen = set()
        for module in self.modules:
            if module.library_name in seen:
                raise ValueError(f"Duplicate module library_name '{module.library_name}'.")
            seen.add(module.library_name)

        if self.generate_single_csharp_file and self.generator_kind != "csharp":
            logger.warning(
                "'generate_single_csharp_file' is set but generator_kind is "
                f"'{self.generator_kind}'. The option only applies to the C# generator."
            )
        return self

    model_config = ConfigDict(
        extra="ignore",
    )


# --- Validation Function ---

def format_validation_errors(error: ValidationError) -> List[str]:
    lines = []
    for item in error.errors():
        loc_parts = [str(loc_item) for loc_item in item.get("loc", ())]
        loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
        lines.append(f"{loc_str}: {item.get('msg', 'Unknown validation error')}")
    return lines


def validate_and_parse_config(config_dict: Dict[str, Any], config_file: Optional[str] = None) -> GeneratorConfigSchema:
    """
    Validates a raw configuration dictionary against the GeneratorConfigSchema.
    Raises ConfigurationError listing every problem if validation fails.
    """
    try:
        validated_config = GeneratorConfigSchema.model_validate(config_dict)
        logger.debug("Configuration dictionary parsed and validated successfully against schema.")
        return validated_config
    except ValidationError as e:
        problems = format_validation_errors(e)
        for problem in problems:
            logger.error(f"  - {problem}")
        raise ConfigurationError(
            f"Configuration validation failed with {len(problems)} error(s)",
            config_file=config_file,
            context={"errors": "; ".join(problems)},
        ) from e


def read_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML configuration file into a dictionary."""
    config_file = Path(config_path)
    if not config_file.is_file():
        raise ConfigurationError(f"Config file not found at {config_path}", config_file=str(config_path))

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML file {config_path}: {e}", config_file=str(config_path)) from e

    if yaml_config is None:
        return {}
    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            f"Content of config file {config_path} must be a mapping, got {type(yaml_config).__name__}",
            config_file=str(config_path),
        )
    logger.debug(f"Loaded configuration from {config_path}")
    return yaml_config


def load_config(config_path: Optional[str], cli_args: Optional[Namespace] = None) -> GeneratorConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        raw_config.update(read_yaml_config(config_path))
        # A relative output_dir in the file is relative to the file itself
        file_output_dir = raw_config.get("output_dir")
        if isinstance(file_output_dir, str) and file_output_dir and not Path(file_output_dir).is_absolute():
            raw_config["output_dir"] = str(Path(config_path).resolve().parent / file_output_dir)

    # 2. Override with CLI arguments (only those explicitly provided)
    overridden_keys = set()
    if cli_args is not None:
        for key, value in vars(cli_args).items():
            if value is not None and key != "modules" and key in GeneratorConfigSchema.model_fields:
                raw_config[key] = value
                overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {overridden_keys}")

    # 3. Validate
    logger.info("Validating final configuration...")
    validated_config = validate_and_parse_config(raw_config, config_file=config_path)

    # 4. Post-validation adjustments
    validated_config.base_dir = str(Path(config_path).resolve().parent) if config_path else str(Path.cwd())
    if validated_config.output_dir:
        validated_config.output_dir = str(Path(validated_config.output_dir).resolve())

    logger.info("Configuration loaded and validated successfully.")
    return validated_config
