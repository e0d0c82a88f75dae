import argparse
import logging
import sys
from typing import List, Optional

from binding_generator.ast_loader import load_ast
from binding_generator.colored_logging import (
    count_noun,
    log_highlight,
    log_progress,
    log_section,
    log_success,
    setup_colored_logging,
)
from binding_generator.config_validation import load_config
from binding_generator.driver import Driver, DriverOptions
from binding_generator.exceptions import BindingGeneratorError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate C# or C++/CLI bindings from parsed translation unit descriptions."
    )
    parser.add_argument(
        "-c",
        "--config",
        required=True,
        help="Path to the YAML configuration file listing the modules to generate.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        help="Directory to write the generated files to. Overrides config file setting.",
    )
    parser.add_argument(
        "-k",
        "--kind",
        dest="generator_kind",
        choices=["cli", "csharp"],
        help="Backend to run. Overrides config file setting.",
    )
    parser.add_argument(
        "--single-file",
        dest="generate_single_csharp_file",
        action="store_true",
        default=None,
        help="Generate one C# file per module instead of one per translation unit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    try:
        log_section(logger, "Configuration")
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)

        log_section(logger, "Translation Units")
        modules, ast_context = load_ast(config)
        log_highlight(
            logger,
            f"Found {count_noun(len(ast_context.translation_units), 'translation unit')} "
            f"in {count_noun(len(modules), 'module')}",
        )

        log_section(logger, "Binding Generation")
        driver = Driver(DriverOptions.from_config(config, modules), ast_context)
        driver.run()

        log_section(logger, "Completion")
        log_success(logger, "Binding generation completed successfully!")
        return 0

    except BindingGeneratorError as e:
        logger.error(str(e), exc_info=args.verbose)
        return 1
    except Exception as e:
        logger.error(f"An unexpected error occurred during generation: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
