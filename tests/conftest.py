import sys
from pathlib import Path
from typing import Callable

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "master-rules").mkdir(parents=True)
    return root


@pytest.fixture
def write_rule(project_root: Path) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        path = project_root / "master-rules" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    root = tmp_path / "assets"
    (root / ".cursor" / "rules").mkdir(parents=True)
    (root / ".github" / "instructions").mkdir(parents=True)
    (root / ".cursor" / "rules" / "README.md").write_text(
        "# Cursor README\n", encoding="utf-8"
    )
    (root / ".github" / "instructions" / "README.md").write_text(
        "# Instructions README\n", encoding="utf-8"
    )
    for name in ("CLAUDE.md", "GEMINI.md"):
        (root / name).write_text(
            f"# {name}\n\n## Development Rules\n\n", encoding="utf-8"
        )
    (root / "AGENTS.md").write_text("# Agents\n", encoding="utf-8")
    (root / "ARCHITECTURE.md").write_text(
        "# Architecture\n\n```text\nunclosed\n", encoding="utf-8"
    )
    (root / "RULES.md").write_text("# Rules\n", encoding="utf-8")
    return root


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    return CliRunner(env={"HOME": str(tmp_path)})
