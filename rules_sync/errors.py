from pathlib import Path


class SyncAppError(Exception):
    """Base user-facing application error."""


class SyncFileError(SyncAppError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingSourceDirError(SyncFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Rules source directory not found")


class TemplateNotFoundError(SyncFileError):
    def __init__(self, path: Path, target: str) -> None:
        self.target = target
        super().__init__(path=path, message=f"Template for {target} not found")


class InvalidConfigFormatError(SyncFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid YAML format ({detail})")


class InvalidConfigSchemaError(SyncFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")
