from typing import Final


HEADER_SEPARATOR: Final[str] = "---"
FENCE_TOKEN: Final[str] = "```"

ALL_FILES_TOKEN: Final[str] = "*,**/*"
NO_FILES_TOKEN: Final[str] = "[]"
ALL_FILES_PATTERNS: Final[frozenset[str]] = frozenset({"*", "**/*"})

DESCRIPTION_KEY: Final[str] = "description"
GLOBS_KEY: Final[str] = "globs"
ALWAYS_APPLY_KEY: Final[str] = "alwaysApply"
APPLY_TO_KEY: Final[str] = "applyTo"

SOURCE_DIRNAME: Final[str] = "master-rules"
SOURCE_SUFFIX: Final[str] = ".md"
CONFIG_FILENAME: Final[str] = ".rules-sync.yaml"
BACKUP_SUFFIX: Final[str] = ".bak"

CURSOR_RULES_DIR: Final[str] = ".cursor/rules"
CURSOR_SUFFIX: Final[str] = ".mdc"
GITHUB_INSTRUCTIONS_DIR: Final[str] = ".github/instructions"
GITHUB_SUFFIX: Final[str] = ".instructions.md"
README_FILENAME: Final[str] = "README.md"

CLAUDE_FILENAME: Final[str] = "CLAUDE.md"
GEMINI_FILENAME: Final[str] = "GEMINI.md"
DOC_FILENAMES: Final[tuple[str, ...]] = (
    "AGENTS.md",
    "ARCHITECTURE.md",
    "RULES.md",
)

GENERATED_MARKER_FILENAME: Final[str] = "derived-cursor-rules.mdc"
GENERATED_PLACEHOLDER_TEXT: Final[str] = (
    f"WARN: SKIPPED auto-generated file: {GENERATED_MARKER_FILENAME}\n"
)

SECTION_HEADING_LEVEL: Final[int] = 3

# Textual rewrites applied to every body line of the Copilot dialect, in order.
COPILOT_SUBSTITUTIONS: Final[tuple[tuple[str, str], ...]] = (
    (CURSOR_RULES_DIR, GITHUB_INSTRUCTIONS_DIR),
    (CURSOR_SUFFIX, GITHUB_SUFFIX),
)
