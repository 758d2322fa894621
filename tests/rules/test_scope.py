"""Tests for globs/alwaysApply to applyTo translation."""

from pathlib import Path

import pytest

from rules_sync.rules.models import (
    AllFiles,
    JoinedPatterns,
    NoFiles,
    PatternList,
    SinglePattern,
)
from rules_sync.rules.parser import parse_rule_text
from rules_sync.rules.scope import (
    parse_always,
    parse_pattern_list,
    parse_scope,
    resolve_scope,
    translate_scope,
)


def _document(header: str):
    return parse_rule_text(f"---\n{header}---\nbody\n", Path("rule.md"))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('["*.py", "src/**/*.py"]', ("*.py", "src/**/*.py")),
        ("['*.py']", ("*.py",)),
        ('"*.js,*.ts"', ("*.js", "*.ts")),
        ("*.py", ("*.py",)),
        ('"[]"', ()),
        ("[]", ()),
        ("", ()),
        (None, ()),
        ('["*.py", "*.md"', ("*.py", "*.md")),
        ('["*.py"] trailing, junk', ("*.py",)),
        ('[" *.py ", "", "*.py"]', ("*.py",)),
    ],
)
def test_parse_pattern_list(raw, expected) -> None:
    assert parse_pattern_list(raw) == expected


def test_parse_always_requires_exact_true() -> None:
    assert parse_always("true") is True
    assert parse_always(" true ") is True
    assert parse_always("True") is False
    assert parse_always("false") is False
    assert parse_always(None) is False


@pytest.mark.parametrize(
    "patterns",
    [(), ("*.py",), ("*.js", "*.ts"), ("[garbage",), ("*", "**/*")],
)
def test_always_wins_over_any_patterns(patterns) -> None:
    scope = translate_scope(PatternList(patterns=patterns, always=True))
    assert scope == AllFiles()
    assert scope.render() == "*,**/*"


@pytest.mark.parametrize("patterns", [("*", "**/*"), ("**/*", "*")])
def test_canonical_pair_collapses(patterns) -> None:
    assert translate_scope(PatternList(patterns=patterns)) == AllFiles()


@pytest.mark.parametrize("pattern", ["*.py", "*", "**/*", "src/**/*.{ts,tsx}"])
def test_single_pattern_passthrough(pattern) -> None:
    scope = translate_scope(PatternList(patterns=(pattern,)))
    assert scope == SinglePattern(pattern)
    assert scope.render() == pattern


def test_multiple_patterns_keep_original_order() -> None:
    scope = translate_scope(PatternList(patterns=("src/*.ts", "*.js", "a/*")))
    assert scope == JoinedPatterns(("src/*.ts", "*.js", "a/*"))
    assert scope.render() == "src/*.ts,*.js,a/*"


def test_pair_plus_extra_pattern_does_not_collapse() -> None:
    scope = translate_scope(PatternList(patterns=("*", "**/*", "*.py")))
    assert scope.render() == "*,**/*,*.py"


def test_no_patterns_and_not_always_is_unresolved() -> None:
    assert translate_scope(PatternList()) is None


def test_parse_scope() -> None:
    assert parse_scope("*,**/*") == AllFiles()
    assert parse_scope("[]") == NoFiles()
    assert parse_scope("") == NoFiles()
    assert parse_scope("*.py") == SinglePattern("*.py")


def test_always_apply_with_globs_gives_all_files() -> None:
    document = _document(
        'description: "Always think"\nglobs: "*.js,*.ts"\nalwaysApply: true\n'
    )
    assert resolve_scope(document, "[]").render() == "*,**/*"


def test_single_glob_not_always() -> None:
    document = _document('globs: "*.py"\nalwaysApply: false\n')
    assert resolve_scope(document, "[]").render() == "*.py"


def test_empty_list_uses_default_marker() -> None:
    document = _document('globs: "[]"\nalwaysApply: false\n')
    assert resolve_scope(document, "[]").render() == "[]"


def test_missing_keys_use_configured_default() -> None:
    document = _document("description: x\n")
    assert resolve_scope(document, "*,**/*") == AllFiles()
    assert resolve_scope(document, "src/**") == SinglePattern("src/**")


def test_existing_apply_to_is_kept() -> None:
    document = _document('applyTo: "docs/**"\nglobs: "*.py"\nalwaysApply: true\n')
    assert resolve_scope(document, "[]").render() == "docs/**"


def test_empty_apply_to_falls_back_to_translation() -> None:
    document = _document('applyTo: ""\nalwaysApply: true\n')
    assert resolve_scope(document, "[]").render() == "*,**/*"


def test_bare_apply_to_falls_back_to_globs() -> None:
    document = _document('applyTo:\nglobs: "*.py"\n')
    assert resolve_scope(document, "[]").render() == "*.py"
