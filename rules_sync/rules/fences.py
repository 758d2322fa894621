"""Keep triple-backtick fences balanced in generated markdown.

This is a counting heuristic, not a markdown parser: two fences that are
both left open still add up to an even count and are not repaired.
"""

from __future__ import annotations

from typing import Sequence

from rules_sync.constants import FENCE_TOKEN


def is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE_TOKEN)


def count_fences(lines: Sequence[str]) -> int:
    return sum(1 for line in lines if is_fence(line))


def balance_fence_lines(lines: list[str]) -> bool:
    """Append a closing fence to ``lines`` in place when the count is odd.

    A blank line is put before the fence unless the last line is already
    blank. Returns whether anything was appended.
    """
    if count_fences(lines) % 2 == 0:
        return False
    if lines and lines[-1].strip():
        lines.append("")
    lines.append(FENCE_TOKEN)
    return True


def balance_fences(text: str) -> str:
    lines = text.splitlines()
    if not balance_fence_lines(lines):
        return text
    if text and not text.endswith("\n"):
        text += "\n"
    return text + "\n".join(lines[len(text.splitlines()) :]) + "\n"
