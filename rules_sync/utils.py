import shutil
from pathlib import Path

from rules_sync.constants import BACKUP_SUFFIX


def backup_path_for(path: Path) -> Path:
    return Path(f"{path}{BACKUP_SUFFIX}")


def backup_file(path: Path) -> Path:
    """Copy ``path`` to ``<path>.bak``, replacing any earlier backup."""
    backup_path = backup_path_for(path)
    shutil.copy2(path, backup_path)
    return backup_path


def copy_file(source: Path, target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)


def write_text(path: Path, payload: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")


def relative_display(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return str(path)


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    home = str(Path.home())
    if text == home:
        return "~"
    return text.replace(f"{home}/", "~/")
