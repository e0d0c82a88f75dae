"""
AST transformation passes.

Backends register the passes their target language needs from
``setup_passes()``; the driver runs them over the AST context before
``process()`` and ``generate()``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List

from .domain.models import ASTContext, Class, Declaration, Function, TranslationUnit
from .domain.naming import generated_identifier

logger = logging.getLogger(__name__)


class TranslationUnitPass(ABC):
    """Base class for passes visiting every translation unit."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def run(self, ast_context: ASTContext) -> None:
        for unit in ast_context.translation_units:
            if unit.is_system_header:
                continue
            self.visit_unit(unit)

    @abstractmethod
    def visit_unit(self, unit: TranslationUnit) -> None:
        pass


def _walk_declarations(unit: TranslationUnit) -> Iterator[Declaration]:
    for decl in unit.declarations:
        yield decl
        if isinstance(decl, Class):
            yield from decl.fields
        elif isinstance(decl, Function):
            yield from decl.parameters


class RenameReservedKeywordsPass(TranslationUnitPass):
    """Renames declarations whose names are keywords of the target language."""

    def __init__(self, keywords: Iterable[str]):
        self.keywords = frozenset(keywords)
        self.renamed_count = 0

    def visit_unit(self, unit: TranslationUnit) -> None:
        for decl in _walk_declarations(unit):
            if decl.name in self.keywords:
                new_name = generated_identifier(decl.name)
                logger.debug(f"{unit.file_path}: renaming reserved name '{decl.name}' to '{new_name}'")
                decl.rename(new_name)
                self.renamed_count += 1


class IgnoreUnnamedDeclarationsPass(TranslationUnitPass):
    """Marks top-level declarations without a name as not generated."""

    def visit_unit(self, unit: TranslationUnit) -> None:
        for decl in unit.declarations:
            if not decl.name and decl.is_generated:
                logger.debug(f"{unit.file_path}: ignoring unnamed {decl.kind}")
                decl.is_generated = False


class PassBuilder:
    """Ordered collection of the passes to run before generation."""

    def __init__(self):
        self.passes: List[TranslationUnitPass] = []

    def add(self, pass_: TranslationUnitPass) -> TranslationUnitPass:
        self.passes.append(pass_)
        return pass_

    def run(self, ast_context: ASTContext) -> None:
        for pass_ in self.passes:
            logger.debug(f"Running pass {pass_.name}")
            pass_.run(ast_context)

    def __len__(self) -> int:
        return len(self.passes)

    def __iter__(self) -> Iterator[TranslationUnitPass]:
        return iter(self.passes)
