"""
Configuration for the font manager: download knobs and the on-disk layout
of a prefix directory.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from termfont.utils.exceptions import OpenPrefixDirectoryError
from termfont.utils.log_config import get_logger

log = get_logger(__name__)

BASE_URL = "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/"
MB = 1 << 20

TERMUX_DIR = ".termux"
FONT_DIR_NAME = "fonts"
CURRENT_FONT_NAME = "font.ttf"
SCRATCH_DIR_NAME = "tmp"
SCRATCH_ARCHIVE_NAME = "tmp.zip"
FONT_SUFFIX = ".ttf"


class FontSettings(BaseModel):
    base_url: str = BASE_URL
    buffer_size: int = Field(8 * MB, gt=0)
    timeout: float = Field(30.0, gt=0)
    user_agent: str = "termfont"

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"


class PrefixLayout(BaseModel):
    """Paths of everything managed under one prefix directory."""

    prefix: Path

    @field_validator("prefix")
    @classmethod
    def _absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"prefix must be an absolute path, got {value}")
        return value

    @classmethod
    def open(cls, prefix: os.PathLike) -> "PrefixLayout":
        """
        Validate that the prefix exists and is a directory.
        The prefix is never created here.
        """
        path = Path(prefix)
        log.debug("opening prefix directory %s", path)
        if not path.is_absolute() or not path.is_dir():
            raise OpenPrefixDirectoryError(path)
        return cls(prefix=path)

    @property
    def font_dir(self) -> Path:
        return self.prefix / FONT_DIR_NAME

    @property
    def current_font(self) -> Path:
        return self.prefix / CURRENT_FONT_NAME

    @property
    def scratch_dir(self) -> Path:
        return self.prefix / SCRATCH_DIR_NAME

    @property
    def scratch_archive(self) -> Path:
        return self.prefix / SCRATCH_ARCHIVE_NAME

    def font_path(self, font_name: str) -> Path:
        check_font_name(font_name)
        return self.font_dir / f"{font_name}{FONT_SUFFIX}"


def check_font_name(font_name: str) -> str:
    """
    Font names become file names directly inside the font directory, so they
    may not be empty, start with a dot or contain a path separator.
    """
    separators = [sep for sep in (os.sep, os.altsep, "/") if sep]
    if (
        not font_name
        or font_name.startswith(".")
        or "\0" in font_name
        or any(sep in font_name for sep in separators)
    ):
        raise ValueError(f"invalid font name {font_name!r}")
    return font_name


def resolve_prefix(
    explicit: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> Path:
    """
    Work out the prefix directory.

    An explicit path wins. Otherwise ``$HOME/.termux`` is used, falling back
    to ``<cwd>/.termux`` when HOME is not set.
    """
    cwd = cwd or Path.cwd()
    if explicit is not None:
        return cwd / explicit

    environ = os.environ if environ is None else environ
    home = environ.get("HOME")
    if not home:
        log.warning("Could not find environment var $HOME, using %s instead", cwd / TERMUX_DIR)
        return cwd / TERMUX_DIR
    return cwd / home / TERMUX_DIR
