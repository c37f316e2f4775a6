"""Error taxonomy for site generation.

Every exception here is fatal: it aborts the run and leaves whatever was
already written on disk. Recoverable conditions (a function that cannot be
rendered, an undocumented function, an asset that cannot be mirrored) are
logged as warnings by the builders and never raised.
"""

from __future__ import annotations

from pathlib import Path


class Pkg2HtmlError(Exception):
    """Base class for all fatal generation errors."""


class InvalidNameError(Pkg2HtmlError, ValueError):
    """A qualified function name cannot be mapped to a page path."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid function name '{name}': {reason}")


class OptionsError(Pkg2HtmlError, ValueError):
    """A configuration option is unknown or has the wrong type."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid option '{key}': {reason}")


class DescriptorError(Pkg2HtmlError):
    """The package descriptor could not be read or is malformed."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f" {path}" if path is not None else ""
        super().__init__(f"Invalid package descriptor{where}: {reason}")


class SiteWriteError(Pkg2HtmlError):
    """A required output directory or file could not be created."""

    def __init__(self, path: Path, what: str, cause: Exception | None = None) -> None:
        self.path = path
        self.what = what
        self.cause = cause
        message = f"Could not write {what} {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class MetadataReadError(Pkg2HtmlError):
    """A package metadata file required by a requested section is unreadable."""

    def __init__(self, path: Path, what: str, cause: Exception | None = None) -> None:
        self.path = path
        self.what = what
        self.cause = cause
        message = f"Couldn't open {what} {path} for reading"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class AlphaIndexCollisionError(Pkg2HtmlError):
    """A key of the alphabetical index would be both a file and a directory."""

    def __init__(self, key: tuple[str, ...]) -> None:
        self.key = key
        super().__init__(
            f"Alphabetical index path '{'/'.join(key)}' is needed both as a "
            "listing file and as a directory"
        )


class ManualConversionError(Pkg2HtmlError):
    """The external manual converter failed."""

    def __init__(self, program: str, returncode: int, detail: str | None = None) -> None:
        self.program = program
        self.returncode = returncode
        self.detail = detail
        message = f"Program `{program}' returned failure code {returncode}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ManualToolNotFoundError(ManualConversionError):
    """The manual converter executable is not installed (exit status 127)."""

    def __init__(self, program: str) -> None:
        self.program = program
        self.returncode = 127
        self.detail = None
        Pkg2HtmlError.__init__(self, f"Program `{program}' not found")


class ManualRootError(Pkg2HtmlError):
    """No entry page could be identified among the converted manual files."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        super().__init__("Unable to determine the root of the HTML manual.")


__all__ = [
    "AlphaIndexCollisionError",
    "DescriptorError",
    "InvalidNameError",
    "ManualConversionError",
    "ManualRootError",
    "ManualToolNotFoundError",
    "MetadataReadError",
    "OptionsError",
    "Pkg2HtmlError",
    "SiteWriteError",
]
