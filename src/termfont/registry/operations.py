"""
Operations on the installed fonts of a prefix: list, set, remove.

None of these create the font directory; only downloading does.
"""

import os
import shutil
from typing import List, Sequence

from termfont.config.settings import PrefixLayout
from termfont.utils.exceptions import (
    DeleteFontDirectoryError,
    DeleteFontFileError,
    OpenFontDirectoryError,
    SetFontFileError,
)
from termfont.utils.log_config import get_logger

log = get_logger(__name__)


def list_fonts(prefix: os.PathLike) -> List[str]:
    """Names of the installed fonts, sorted."""
    layout = PrefixLayout.open(prefix)

    log.debug("opening font dir %s", layout.font_dir)
    try:
        with os.scandir(layout.font_dir) as entries:
            names = {
                os.path.splitext(entry.name)[0]
                for entry in entries
                if entry.is_file() and not entry.name.startswith(".")
            }
    except OSError as e:
        raise OpenFontDirectoryError(layout.font_dir, str(e)) from e

    return sorted(names)


def set_font(font_name: str, prefix: os.PathLike) -> None:
    """Copy an installed font over the current font file."""
    layout = PrefixLayout.open(prefix)
    try:
        source = layout.font_path(font_name)
    except ValueError as e:
        raise SetFontFileError(font_name, str(e)) from e

    log.info("copying font file at %s to %s", source, layout.current_font)
    if not source.is_file():
        raise SetFontFileError(source, "font is not installed")
    try:
        shutil.copyfile(source, layout.current_font)
    except OSError as e:
        raise SetFontFileError(source, str(e)) from e


def remove_fonts(
    font_names: Sequence[str],
    prefix: os.PathLike,
    remove_current: bool = False,
) -> None:
    """
    Delete the named fonts, stopping at the first one that cannot be deleted.
    With ``remove_current`` the current font file goes too.
    """
    layout = PrefixLayout.open(prefix)

    for font_name in font_names:
        try:
            path = layout.font_path(font_name)
        except ValueError as e:
            raise DeleteFontFileError(font_name, str(e)) from e
        log.info("deleting font file at %s", path)
        try:
            path.unlink()
        except OSError as e:
            raise DeleteFontFileError(path, str(e)) from e

    if remove_current:
        _remove_current_font(layout)


def remove_all_fonts(prefix: os.PathLike, exclude_current: bool = False) -> None:
    """Delete the whole font directory, and the current font unless excluded."""
    layout = PrefixLayout.open(prefix)

    log.info("deleting %s", layout.font_dir)
    try:
        shutil.rmtree(layout.font_dir)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise DeleteFontDirectoryError(layout.font_dir, str(e)) from e

    if not exclude_current:
        _remove_current_font(layout)


def _remove_current_font(layout: PrefixLayout) -> None:
    log.info("deleting %s", layout.current_font)
    try:
        layout.current_font.unlink()
    except OSError as e:
        raise DeleteFontFileError(layout.current_font, str(e)) from e
