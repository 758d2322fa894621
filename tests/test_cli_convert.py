from pathlib import Path

from rules_sync.__main__ import cli


def _cursor_rules(root: Path) -> Path:
    rules = root / ".cursor" / "rules"
    rules.mkdir(parents=True)
    return rules


def _convert(cli_runner, root: Path, *extra: str):
    return cli_runner.invoke(cli, ["convert", str(root), *extra])


def test_convert_rewrites_headers(cli_runner, tmp_path: Path) -> None:
    rules = _cursor_rules(tmp_path)
    (rules / "style.mdc").write_text(
        "---\ndescription: Style\nglobs: *.ts, *.tsx\nalwaysApply: false\n---\nUse .mdc files.\n",
        encoding="utf-8",
    )

    result = _convert(cli_runner, tmp_path)

    assert result.exit_code == 0, result.output
    assert "Conversion complete!" in result.output
    text = (tmp_path / ".github" / "instructions" / "style.instructions.md").read_text(
        encoding="utf-8"
    )
    assert text.startswith("---\ndescription: Style\n")
    assert "\n---\n\nUse .instructions.md files.\n" in text
    assert "globs:" not in text
    assert "alwaysApply:" not in text


def test_convert_preserves_subdirectories(cli_runner, tmp_path: Path) -> None:
    rules = _cursor_rules(tmp_path)
    (rules / "api").mkdir()
    (rules / "api" / "routes.mdc").write_text("Routes\n", encoding="utf-8")

    result = _convert(cli_runner, tmp_path)

    assert result.exit_code == 0, result.output
    assert (tmp_path / ".github" / "instructions" / "api" / "routes.instructions.md").exists()


def test_convert_skips_generated_rules(cli_runner, tmp_path: Path) -> None:
    rules = _cursor_rules(tmp_path)
    (rules / "derived-cursor-rules.mdc").write_text("generated\n", encoding="utf-8")

    result = _convert(cli_runner, tmp_path)

    assert result.exit_code == 0, result.output
    output = tmp_path / ".github" / "instructions" / "derived-cursor-rules.instructions.md"
    assert output.read_text(encoding="utf-8") == (
        "WARN: SKIPPED auto-generated file: derived-cursor-rules.mdc\n"
    )


def test_convert_keeps_existing_readme(cli_runner, tmp_path: Path) -> None:
    rules = _cursor_rules(tmp_path)
    (rules / "a.mdc").write_text("A\n", encoding="utf-8")
    target = tmp_path / ".github" / "instructions"
    target.mkdir(parents=True)
    (target / "README.md").write_text("mine\n", encoding="utf-8")

    result = _convert(cli_runner, tmp_path)

    assert result.exit_code == 0, result.output
    assert (target / "README.md").read_text(encoding="utf-8") == "mine\n"
    assert not (target / "README.md.bak").exists()


def test_convert_copies_missing_readme(cli_runner, tmp_path: Path) -> None:
    rules = _cursor_rules(tmp_path)
    (rules / "a.mdc").write_text("A\n", encoding="utf-8")

    assert _convert(cli_runner, tmp_path).exit_code == 0
    assert (tmp_path / ".github" / "instructions" / "README.md").exists()


def test_convert_dry_run_writes_nothing(cli_runner, tmp_path: Path) -> None:
    rules = _cursor_rules(tmp_path)
    (rules / "a.mdc").write_text("A\n", encoding="utf-8")

    result = _convert(cli_runner, tmp_path, "--dry-run")

    assert result.exit_code == 0, result.output
    assert not (tmp_path / ".github").exists()


def test_convert_without_cursor_rules_fails(cli_runner, tmp_path: Path) -> None:
    result = _convert(cli_runner, tmp_path)
    assert result.exit_code != 0
    assert "Rules source directory not found" in result.output
