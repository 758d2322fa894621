"""Project configuration: ``.rules-sync.yaml`` plus command-line overrides."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml
from jsonschema import Draft202012Validator

from rules_sync.constants import CONFIG_FILENAME, NO_FILES_TOKEN, SOURCE_DIRNAME
from rules_sync.errors import InvalidConfigFormatError, InvalidConfigSchemaError
from rules_sync.models import DEFAULT_TARGETS

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "config_schema.json"
BUNDLED_ASSETS_DIR = Path(__file__).resolve().parent / "assets"


@dataclass(frozen=True)
class SyncConfig:
    project_root: Path
    source_dir: Path
    assets_dir: Path
    targets: tuple[str, ...] = DEFAULT_TARGETS
    default_scope: str = NO_FILES_TOKEN

    @classmethod
    def for_project(cls, project_root: Path) -> "SyncConfig":
        return cls(
            project_root=project_root,
            source_dir=project_root / SOURCE_DIRNAME,
            assets_dir=BUNDLED_ASSETS_DIR,
        )

    def with_overrides(
        self,
        targets: Optional[Sequence[str]] = None,
        default_scope: Optional[str] = None,
        assets_dir: Optional[Path] = None,
        source_dir: Optional[Path] = None,
    ) -> "SyncConfig":
        changes: dict[str, Any] = {}
        if targets is not None:
            changes["targets"] = tuple(targets)
        if default_scope is not None:
            changes["default_scope"] = default_scope
        if assets_dir is not None:
            changes["assets_dir"] = self._resolve(assets_dir)
        if source_dir is not None:
            changes["source_dir"] = self._resolve(source_dir)
        return replace(self, **changes)

    def _resolve(self, path: Path) -> Path:
        path = path.expanduser()
        if path.is_absolute():
            return path
        return self.project_root / path


def format_schema_error(error: Any) -> str:
    location = ".".join(str(item) for item in error.absolute_path)
    if location:
        return f"{location}: {error.message}"
    return error.message


def load_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def parse_targets(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(project_root: Path) -> SyncConfig:
    config = SyncConfig.for_project(project_root)
    path = project_root / CONFIG_FILENAME
    if not path.exists():
        return config

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidConfigFormatError(path, str(exc)) from exc
    if raw is None:
        return config

    error = next(iter(Draft202012Validator(load_schema()).iter_errors(raw)), None)
    if error is not None:
        raise InvalidConfigSchemaError(path, format_schema_error(error))

    logger.debug("Loaded config from %s", path)
    return config.with_overrides(
        targets=raw.get("targets"),
        default_scope=raw.get("default_scope"),
        assets_dir=Path(raw["assets_dir"]) if "assets_dir" in raw else None,
        source_dir=Path(raw["source_dir"]) if "source_dir" in raw else None,
    )
