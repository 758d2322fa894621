"""Translate Cursor-style scoping (globs + alwaysApply) into a Copilot ``applyTo``."""

from __future__ import annotations

from typing import Optional

from rules_sync.constants import (
    ALL_FILES_PATTERNS,
    ALWAYS_APPLY_KEY,
    APPLY_TO_KEY,
    GLOBS_KEY,
)
from rules_sync.rules.models import (
    AllFiles,
    JoinedPatterns,
    NoFiles,
    PatternList,
    RuleDocument,
    Scope,
    SinglePattern,
)

_QUOTES = "\"'"


def parse_pattern_list(raw: Optional[str]) -> tuple[str, ...]:
    """Parse a bracketed, comma-separated, optionally quoted list of globs.

    Parsing is lossy but never fails: text before the first ``[`` is
    ignored and the list ends at the first ``]`` (or the end of the value
    when there is none). Brackets are optional, so ``"*.js,*.ts"`` parses
    the same as ``["*.js", "*.ts"]``. Empty entries and repeats are dropped,
    first-seen order is kept.
    """
    if not raw:
        return ()
    body = raw
    if "[" in body:
        body = body.split("[", 1)[1]
    body = body.split("]", 1)[0]

    patterns: list[str] = []
    for part in body.split(","):
        pattern = part.strip().strip(_QUOTES).strip()
        if pattern and pattern not in patterns:
            patterns.append(pattern)
    return tuple(patterns)


def parse_always(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    return raw.strip() == "true"


def translate_scope(pattern_list: PatternList) -> Optional[Scope]:
    """Merge list-form scope into a single scope.

    ``None`` means neither patterns nor ``always`` were given, and the
    caller has to fall back to its configured default.
    """
    if pattern_list.always:
        return AllFiles()

    patterns = pattern_list.patterns
    if not patterns:
        return None
    if len(patterns) == 1:
        return SinglePattern(patterns[0])
    if len(patterns) == len(ALL_FILES_PATTERNS) and set(patterns) == ALL_FILES_PATTERNS:
        return AllFiles()
    return JoinedPatterns(tuple(patterns))


def parse_scope(text: str) -> Scope:
    """Parse an already merged ``applyTo`` string, e.g. a configured default."""
    scope = translate_scope(PatternList(patterns=parse_pattern_list(text)))
    return scope if scope is not None else NoFiles()


def pattern_list_from_header(document: RuleDocument) -> PatternList:
    return PatternList(
        patterns=parse_pattern_list(document.get(GLOBS_KEY)),
        always=parse_always(document.get(ALWAYS_APPLY_KEY)),
    )


def resolve_scope(document: RuleDocument, default_scope: str) -> Scope:
    """Pick the ``applyTo`` scope for a document.

    A non-empty ``applyTo`` already present in the header wins over ``globs`` and
    ``alwaysApply``.
    """
    existing = document.get(APPLY_TO_KEY)
    if existing is not None and existing.strip().strip(_QUOTES).strip():
        return parse_scope(existing)

    scope = translate_scope(pattern_list_from_header(document))
    if scope is None:
        return parse_scope(default_scope)
    return scope
