"""Custom exception hierarchy.

Every failure the font manager can report has its own class so the CLI
can attach a targeted hint. The intermediate classes group them by kind.
"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class FontError(Exception):
    """Base for every project exception."""

    message = "font operation failed"

    def __init__(self, path: Optional[PathLike] = None, detail: Optional[str] = None):
        self.path = path
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.path is not None:
            text = f"{text}: {self.path}"
        if self.detail:
            text = f"{text} ({self.detail})"
        return text


# ── transport ─────────────────────────────────────────────

class TransportError(FontError):
    """Remote archive could not be fetched."""


class InvalidHttpResponseError(TransportError):
    message = "invalid HTTP response"

    def __init__(self, url: str, status: Optional[int] = None, detail: Optional[str] = None):
        self.url = url
        self.status = status
        if status is not None and detail is None:
            detail = f"status {status}"
        super().__init__(url, detail)


# ── setup ─────────────────────────────────────────────────

class SetupError(FontError):
    """Scratch or permanent state could not be prepared."""


class OpenPrefixDirectoryError(SetupError):
    message = "cannot open prefix directory"


class CreateTemporaryDirectoryError(SetupError):
    message = "cannot create temporary directory"


class CreateTemporaryZipFileError(SetupError):
    message = "cannot create temporary zip file"


class CreateFontDirectoryError(SetupError):
    message = "cannot create font directory"


class DeleteTemporaryDirectoryError(SetupError):
    message = "cannot delete leftover temporary directory"


class DeleteTemporaryZipFileError(SetupError):
    message = "cannot delete leftover temporary zip file"


class FlushTemporaryZipFileError(SetupError):
    message = "cannot write temporary zip file"


# ── extraction ────────────────────────────────────────────

class ExtractionError(FontError):
    """Archive content could not be expanded."""


class FailedZipExtractionError(ExtractionError):
    message = "failed to extract zip archive"


# ── lookup ────────────────────────────────────────────────

class FontLookupError(FontError):
    """Expected font file is not in the extracted archive."""


class FontNotFoundError(FontLookupError):
    message = "font not found in archive"

    def __init__(self, font_name: str, path: Optional[PathLike] = None):
        self.font_name = font_name
        super().__init__(path, f"expected {font_name}NerdFont-Regular.ttf")


class WalkTemporaryDirectoryError(FontLookupError):
    message = "cannot walk temporary directory"


# ── installation ──────────────────────────────────────────

class InstallationError(FontError):
    """Located font could not be saved into the font directory."""


class SaveFontFileError(InstallationError):
    message = "cannot save font file"


# ── registry ──────────────────────────────────────────────

class RegistryError(FontError):
    """List, set or remove failed."""


class OpenFontDirectoryError(RegistryError):
    message = "cannot open font directory"


class SetFontFileError(RegistryError):
    message = "cannot set current font"


class DeleteFontFileError(RegistryError):
    message = "cannot delete font file"


class DeleteFontDirectoryError(RegistryError):
    message = "cannot delete font directory"
