"""Split rule documents into a header block and a body."""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

from rules_sync.constants import HEADER_SEPARATOR
from rules_sync.rules.models import HeaderLine, RuleDocument

logger = logging.getLogger(__name__)

_HEADER_LINE_RE = re.compile(r"^([A-Za-z_][\w-]*):\s*(.*?)\s*$")


class ScanState(str, Enum):
    BEFORE_HEADER = "before_header"
    IN_HEADER = "in_header"
    IN_BODY = "in_body"


def scan_lines(lines: Iterable[str]) -> Iterator[tuple[ScanState, str]]:
    """Label every line with the part of the document it belongs to.

    Both separator lines of a header block are labelled ``IN_HEADER``. A
    document whose first separator is never closed has no header: the
    opening separator is dropped and everything after it is body.
    """
    lines = list(lines)
    if not lines or lines[0] != HEADER_SEPARATOR:
        for line in lines:
            yield ScanState.IN_BODY, line
        return

    if HEADER_SEPARATOR not in lines[1:]:
        for line in lines[1:]:
            yield ScanState.IN_BODY, line
        return

    state = ScanState.BEFORE_HEADER
    for line in lines:
        if state == ScanState.BEFORE_HEADER:
            state = ScanState.IN_HEADER
            yield ScanState.IN_HEADER, line
        elif state == ScanState.IN_HEADER:
            yield ScanState.IN_HEADER, line
            if line == HEADER_SEPARATOR:
                state = ScanState.IN_BODY
        else:
            yield ScanState.IN_BODY, line


def parse_header_line(line: str) -> HeaderLine:
    match = _HEADER_LINE_RE.match(line)
    if match is None:
        return HeaderLine(raw=line)
    return HeaderLine(raw=line, key=match.group(1), value=match.group(2))


def split_header(lines: Iterable[str]) -> tuple[tuple[HeaderLine, ...], tuple[str, ...], bool]:
    header: list[HeaderLine] = []
    body: list[str] = []
    has_header = False
    for state, line in scan_lines(lines):
        if state == ScanState.IN_BODY:
            body.append(line)
            continue
        has_header = True
        if line == HEADER_SEPARATOR or not line.strip():
            continue
        header.append(parse_header_line(line))
    return tuple(header), tuple(body), has_header


def parse_rule_text(text: str, source_path: Path) -> RuleDocument:
    header, body, has_header = split_header(text.splitlines())
    return RuleDocument(
        source_path=source_path, header=header, body=body, has_header=has_header
    )


def parse_rule(path: Path) -> RuleDocument:
    document = parse_rule_text(path.read_text(encoding="utf-8"), path)
    if not document.has_header:
        logger.warning("No header block found in %s", path)
    return document
