"""
Renderable templates produced by backends.

A template is created by a backend's ``generate_units`` and finalized by the
aggregation strategy with ``process()``, exactly once, before its text is
read.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateError as JinjaTemplateError,
    select_autoescape,
    ext as jinja2_extensions,
)

from ..domain.models import Declaration, TranslationUnit
from ..domain.naming import generated_identifier
from ..exceptions import TemplateError

logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to the package root
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_JINJA_ENV: Optional[Environment] = None


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        extensions=[
            jinja2_extensions.do,
            jinja2_extensions.loopcontrols,
        ],
    )
    env.filters["generated_id"] = generated_identifier
    return env


def get_jinja_env() -> Environment:
    global _JINJA_ENV
    if _JINJA_ENV is None:
        _JINJA_ENV = setup_jinja_env()
    return _JINJA_ENV


class Template:
    """
    Intermediate representation of generated text for one unit or module.

    Subclasses implement ``render``; ``process`` runs it once and stores the
    result.
    """

    file_extension: str = ""
    file_name_suffix: str = ""

    def __init__(self, units: Sequence[TranslationUnit], context):
        self.units: List[TranslationUnit] = list(units)
        self.context = context
        self._text: Optional[str] = None

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def is_processed(self) -> bool:
        return self._text is not None

    @property
    def declarations(self) -> List[Declaration]:
        return [decl for unit in self.units for decl in unit.generated_declarations]

    @property
    def text(self) -> str:
        if self._text is None:
            raise TemplateError(
                f"Template '{self.name}' was read before it was processed",
                template=self.name,
            )
        return self._text

    def process(self) -> None:
        """Finalize the template. Must be called exactly once."""
        if self._text is not None:
            raise TemplateError(
                f"Template '{self.name}' has already been processed",
                template=self.name,
            )
        self._text = self.render()
        logger.debug(f"Processed template {self.name} ({len(self._text)} characters)")

    def render(self) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.name}(units={[unit.file_path for unit in self.units]!r}, processed={self.is_processed})"


class JinjaTemplate(Template):
    """Template rendered from a ``.j2`` file of the package templates directory."""

    template_name: str = ""

    def get_render_context(self) -> Dict[str, Any]:
        return {
            "units": self.units,
            "declarations": self.declarations,
            "output_namespace": self.context.output_namespace,
            "module": self.context.module,
            "type_name": self.context.type_printer,
            "file_name_suffix": self.file_name_suffix,
        }

    def render(self) -> str:
        try:
            template = get_jinja_env().get_template(self.template_name)
            return template.render(self.get_render_context())
        except JinjaTemplateError as e:
            logger.error(f"Error rendering template '{self.template_name}': {e}", exc_info=True)
            raise TemplateError(
                f"Failed to render '{self.template_name}': {e}",
                template=self.template_name,
            ) from e
