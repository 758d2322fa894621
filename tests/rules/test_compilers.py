"""Tests for the Copilot instructions compiler."""

import logging
from pathlib import Path

from rules_sync.rules.compilers import (
    CopilotRuleCompiler,
    is_generated_placeholder,
    rewrite_line,
)
from rules_sync.rules.parser import parse_rule_text


def _document(text: str, name: str = "1001-style.md"):
    return parse_rule_text(text, Path("/fake") / name)


def test_compile_rewrites_header() -> None:
    document = _document(
        "---\n"
        'description: "Always think"\n'
        'globs: "*.js,*.ts"\n'
        "alwaysApply: true\n"
        "---\n"
        "\n"
        "# Think\n"
        "Body.\n"
    )
    compiled = CopilotRuleCompiler().compile(document)

    assert compiled.filename == "1001-style.instructions.md"
    assert compiled.skipped is False
    assert compiled.content == (
        "---\n"
        'description: "Always think"\n'
        'applyTo: "*,**/*"\n'
        "---\n"
        "\n"
        "\n"
        "# Think\n"
        "Body.\n"
    )


def test_compile_without_description_emits_empty_one() -> None:
    document = _document('---\nglobs: "*.py"\n---\nBody\n')
    content = CopilotRuleCompiler().compile(document).content
    assert content.splitlines()[:4] == [
        "---",
        'description: ""',
        'applyTo: "*.py"',
        "---",
    ]


def test_description_round_trips_exactly() -> None:
    document = _document("---\ndescription: Use tabs, not spaces: always\n---\nx\n")
    content = CopilotRuleCompiler().compile(document).content
    assert "description: Use tabs, not spaces: always\n" in content


def test_other_metadata_is_kept_in_order() -> None:
    document = _document(
        "---\nauthor: me\ndescription: d\nglobs: '*.py'\ntags: [a, b]\n---\nx\n"
    )
    header = CopilotRuleCompiler().compile(document).content.split("---\n")[1]
    assert header.splitlines() == [
        "description: d",
        "author: me",
        "tags: [a, b]",
        'applyTo: "*.py"',
    ]


def test_no_header_uses_default_scope() -> None:
    document = _document("# Plain\n")
    assert 'applyTo: "[]"' in CopilotRuleCompiler().compile(document).content
    compiler = CopilotRuleCompiler(default_scope="*,**/*")
    assert 'applyTo: "*,**/*"' in compiler.compile(document).content


def test_body_paths_are_rewritten() -> None:
    document = _document(
        "---\ndescription: d\n---\n"
        "See .cursor/rules/1002-other.mdc and x.mdc, x.mdc.\n"
        "Untouched line.\n"
    )
    body = CopilotRuleCompiler().compile(document).content.splitlines()[5:]
    assert body == [
        "See .github/instructions/1002-other.instructions.md and "
        "x.instructions.md, x.instructions.md.",
        "Untouched line.",
    ]


def test_rewrite_line_is_global_within_line() -> None:
    line = rewrite_line("a.mdc b.mdc", [(".mdc", ".instructions.md")])
    assert line == "a.instructions.md b.instructions.md"


def test_mdc_source_filename() -> None:
    document = _document("---\ndescription: d\n---\nx\n", name="style.mdc")
    assert CopilotRuleCompiler().compile(document).filename == "style.instructions.md"


def test_generated_marker_file_is_skipped() -> None:
    document = _document("---\ndescription: d\n---\nx\n", name="derived-cursor-rules.mdc")
    compiled = CopilotRuleCompiler().compile(document)
    assert compiled.skipped is True
    assert compiled.content == (
        "WARN: SKIPPED auto-generated file: derived-cursor-rules.mdc\n"
    )


def test_generated_marker_body_line_is_skipped() -> None:
    document = _document("---\ndescription: d\n---\nderived-cursor-rules.mdc\n")
    assert is_generated_placeholder(document) is True
    assert CopilotRuleCompiler().compile(document).skipped is True


def test_marker_inside_text_is_not_a_placeholder() -> None:
    document = _document("See derived-cursor-rules.mdc for history.\n")
    assert is_generated_placeholder(document) is False


def test_placeholder_skip_logs_warning(caplog) -> None:
    document = _document("x\n", name="derived-cursor-rules.mdc")

    with caplog.at_level(logging.WARNING, logger="rules_sync"):
        CopilotRuleCompiler().compile(document)

    assert any(
        record.levelno == logging.WARNING and "Skipped auto-generated file" in record.getMessage()
        for record in caplog.records
    )
