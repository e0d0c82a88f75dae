"""
Driver: runs one backend over the loaded AST.

The driver owns the options, the AST context and the pass list, creates the
generator for the configured kind and streams each output to disk as soon as
the generator reports it.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .colored_logging import count_noun, log_progress, log_success
from .config_validation import GeneratorConfigSchema
from .domain.models import ASTContext, Module
from .exceptions import CodeGenerationError
from .generators.aggregation import AggregationMode, EmptyOutputPolicy
from .generators.factory import GeneratorFactory
from .generators.outputs import GeneratorKind, GeneratorOutput
from .passes import PassBuilder

logger = logging.getLogger(__name__)


@dataclass
class DriverOptions:
    """Options consumed by the driver and the generator core."""

    generator_kind: GeneratorKind = GeneratorKind.CSHARP
    modules: List[Module] = field(default_factory=list)
    generate_single_csharp_file: bool = False
    output_dir: Optional[str] = None
    empty_output_policy: EmptyOutputPolicy = EmptyOutputPolicy.STOP

    def __post_init__(self):
        self.generator_kind = GeneratorKind(self.generator_kind)
        self.empty_output_policy = EmptyOutputPolicy(self.empty_output_policy)

    @property
    def is_csharp_generator(self) -> bool:
        return self.generator_kind is GeneratorKind.CSHARP

    @property
    def is_cli_generator(self) -> bool:
        return self.generator_kind is GeneratorKind.CLI

    @property
    def aggregation_mode(self) -> AggregationMode:
        if self.is_csharp_generator and self.generate_single_csharp_file:
            return AggregationMode.SINGLE_FILE
        return AggregationMode.PER_UNIT

    @classmethod
    def from_config(cls, config: GeneratorConfigSchema, modules: List[Module]) -> "DriverOptions":
        return cls(
            generator_kind=GeneratorKind(config.generator_kind),
            modules=modules,
            generate_single_csharp_file=config.generate_single_csharp_file,
            output_dir=config.output_dir or None,
            empty_output_policy=EmptyOutputPolicy(config.empty_output_policy),
        )


class OutputWriter:
    """Writes the templates of each generator output under ``output_dir``."""

    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)
        self.written_files: List[Path] = []

    def output_path(self, output: GeneratorOutput, template) -> Path:
        unit = output.translation_unit
        return self.output_dir / f"{unit.file_stem}{template.file_name_suffix}.{template.file_extension}"

    def write(self, output: GeneratorOutput) -> List[Path]:
        paths = []
        for template in output.templates:
            path = self.output_path(output, template)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(template.text)
            logger.info(f"Generated file: {path}")
            paths.append(path)
        self.written_files.extend(paths)
        return paths


class Driver:
    """Runs the configured backend over the AST context."""

    def __init__(self, options: DriverOptions, ast_context: Optional[ASTContext] = None):
        self.options = options
        self.ast_context = ast_context if ast_context is not None else ASTContext.from_modules(options.modules)
        self.passes = PassBuilder()
        self.generator = None

    def create_generator(self):
        return GeneratorFactory.create(self.options.generator_kind, self)

    def run(self) -> List[GeneratorOutput]:
        """Set up passes, process and generate. Returns the outputs in production order."""
        self.generator = generator = self.create_generator()
        backend = type(generator).__name__

        with generator:
            log_progress(logger, f"Setting up passes for {backend}...")
            if not generator.setup_passes():
                raise CodeGenerationError(f"{backend} failed to set up its passes", backend=backend)

            self.passes.run(self.ast_context)
            generator.process()

            writer = None
            if self.options.output_dir:
                writer = OutputWriter(self.options.output_dir)
                generator.on_unit_generated = writer.write

            log_progress(logger, f"Generating {self.options.generator_kind.value} bindings...")
            outputs = generator.generate()

        log_success(logger, f"Generated {count_noun(len(outputs), 'output')}")
        if writer is not None:
            logger.info(f"Wrote {count_noun(len(writer.written_files), 'file')} to {writer.output_dir}")
        return outputs
