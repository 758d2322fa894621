"""Merge many rule documents into one generated markdown file.

The output starts with a fixed scaffold (a template copied verbatim) and
then has one heading per rule, in the order the rules were given. Each
section body is the rule without its header block and without its first
``# `` heading, with blank lines normalised:

* blank lines before the first content line are dropped,
* runs of blank lines collapse to a single blank line,
* every section ends with exactly one blank line.

Fences are re-balanced after every section so a code block left open in
one rule is closed before the next rule's heading, and once more at the end.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from rules_sync.constants import SECTION_HEADING_LEVEL
from rules_sync.rules.fences import balance_fence_lines
from rules_sync.rules.models import AggregatedDocument, RuleDocument, Section
from rules_sync.rules.parser import ScanState, scan_lines

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^(\d+)[-_](.*)$")
_TITLE_RE = re.compile(r"^#\s+(.*?)\s*$")


def split_identifier(stem: str) -> tuple[str, str]:
    """``"1001-code-style"`` -> ``("1001", "code-style")``; no prefix -> ``("", stem)``."""
    match = _IDENTIFIER_RE.match(stem)
    if match is None:
        return "", stem
    return match.group(1), match.group(2)


def _title_of(line: str) -> str:
    match = _TITLE_RE.match(line)
    return match.group(1) if match is not None else ""


def find_title(lines: Iterable[str]) -> str:
    for line in lines:
        title = _title_of(line)
        if title:
            return title
    return ""


@dataclass
class _BodyState:
    started: bool = False
    pending_blank: bool = False
    heading_consumed: bool = False


def normalize_body(lines: Sequence[str]) -> list[str]:
    """Strip the header block and the title heading, and normalise blank lines."""
    state = _BodyState()
    out: list[str] = []
    for scan_state, line in scan_lines(lines):
        if scan_state != ScanState.IN_BODY:
            continue
        if not state.heading_consumed and _title_of(line):
            state.heading_consumed = True
            continue
        if not line.strip():
            if state.started:
                state.pending_blank = True
            continue
        if state.pending_blank:
            out.append("")
            state.pending_blank = False
        out.append(line)
        state.started = True
    return out


class DocumentAggregator:
    def __init__(self, heading_level: int = SECTION_HEADING_LEVEL) -> None:
        self.heading_level = heading_level

    def build_section(self, document: RuleDocument) -> Section:
        identifier, remainder = split_identifier(document.stem)
        title = find_title(document.body)
        if not title:
            logger.debug("No title heading in %s, using file name", document.source_path)
            title = remainder
        return Section(
            identifier=identifier,
            title=title,
            body=tuple(normalize_body(document.source_lines())),
        )

    def aggregate(
        self, documents: Sequence[RuleDocument], scaffold: str
    ) -> AggregatedDocument:
        return AggregatedDocument(
            scaffold=tuple(scaffold.splitlines()),
            sections=tuple(self.build_section(document) for document in documents),
        )

    def render(self, aggregated: AggregatedDocument) -> str:
        lines = list(aggregated.scaffold)
        for section in aggregated.sections:
            lines.append(section.heading(self.heading_level))
            lines.append("")
            lines.extend(section.body)
            balance_fence_lines(lines)
            if lines[-1] != "":
                lines.append("")
        balance_fence_lines(lines)
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def compile(self, documents: Sequence[RuleDocument], scaffold: str) -> str:
        return self.render(self.aggregate(documents, scaffold))
