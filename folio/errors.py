"""Error hierarchy for the build pipeline."""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base error; carries the source path that caused it, once known."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.message = message
        self.path = str(path) if path is not None else None
        super().__init__(message)

    def at(self, path: str | Path) -> FolioError:
        """Attach *path* unless one is already set, and return self."""
        if self.path is None:
            self.path = str(path)
        return self

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class MalformedFrontmatter(FolioError):
    """The ``---`` delimiters around the metadata block are missing."""


class StructuredDataError(FolioError):
    """The metadata block does not parse into a Frontmatter record."""


class MathRenderError(FolioError):
    """A math expression could not be rendered. Never fatal."""


class TemplateRenderError(FolioError):
    """A template failed to load or render."""


class IoError(FolioError):
    """Reading or writing a file failed, or its bytes are not valid UTF-8."""

    def __init__(self, path: str | Path, cause: OSError | UnicodeDecodeError) -> None:
        super().__init__(getattr(cause, "strerror", None) or str(cause), path)
        self.__cause__ = cause
