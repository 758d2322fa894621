"""Per-assistant rule compilers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from rules_sync.constants import (
    ALWAYS_APPLY_KEY,
    APPLY_TO_KEY,
    COPILOT_SUBSTITUTIONS,
    DESCRIPTION_KEY,
    GENERATED_MARKER_FILENAME,
    GENERATED_PLACEHOLDER_TEXT,
    GITHUB_SUFFIX,
    GLOBS_KEY,
    HEADER_SEPARATOR,
    NO_FILES_TOKEN,
)
from rules_sync.rules.models import RuleDocument
from rules_sync.rules.scope import resolve_scope

logger = logging.getLogger(__name__)

# Keys the Copilot header is rebuilt from; every other header line is kept as is.
_TRANSLATED_KEYS = frozenset({DESCRIPTION_KEY, GLOBS_KEY, ALWAYS_APPLY_KEY, APPLY_TO_KEY})


@dataclass(frozen=True)
class CompiledRule:
    filename: str
    content: str
    skipped: bool = False


class IRuleCompiler(ABC):
    @abstractmethod
    def compile(self, document: RuleDocument) -> CompiledRule:
        """Return the compiled file name and content for the target assistant."""


def is_generated_placeholder(document: RuleDocument) -> bool:
    if document.name == GENERATED_MARKER_FILENAME:
        return True
    return any(line == GENERATED_MARKER_FILENAME for line in document.body)


def rewrite_line(line: str, substitutions: Sequence[tuple[str, str]]) -> str:
    for old, new in substitutions:
        line = line.replace(old, new)
    return line


class CopilotRuleCompiler(IRuleCompiler):
    """Compile to GitHub Copilot ``.instructions.md`` with an ``applyTo`` header."""

    def __init__(
        self,
        default_scope: str = NO_FILES_TOKEN,
        substitutions: Sequence[tuple[str, str]] = COPILOT_SUBSTITUTIONS,
    ) -> None:
        self.default_scope = default_scope
        self.substitutions = tuple(substitutions)

    def filename_for(self, document: RuleDocument) -> str:
        return f"{document.stem}{GITHUB_SUFFIX}"

    def compile(self, document: RuleDocument) -> CompiledRule:
        filename = self.filename_for(document)
        if is_generated_placeholder(document):
            logger.warning(
                "Skipped auto-generated file %s; move its content into numbered rules",
                document.source_path,
            )
            return CompiledRule(filename, GENERATED_PLACEHOLDER_TEXT, skipped=True)

        return CompiledRule(filename, self.render(document))

    def render(self, document: RuleDocument) -> str:
        scope = resolve_scope(document, self.default_scope)

        lines = [HEADER_SEPARATOR, self._description_line(document)]
        lines.extend(
            line.raw
            for line in document.header
            if line.key not in _TRANSLATED_KEYS
        )
        lines.append(f'{APPLY_TO_KEY}: "{scope.render()}"')
        lines.append(HEADER_SEPARATOR)
        lines.append("")
        lines.extend(rewrite_line(line, self.substitutions) for line in document.body)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _description_line(document: RuleDocument) -> str:
        for line in document.header:
            if line.key == DESCRIPTION_KEY:
                return line.raw
        return f'{DESCRIPTION_KEY}: ""'
