import os
import shutil
from pathlib import Path

from termfont.config.settings import FONT_SUFFIX, check_font_name
from termfont.utils.exceptions import SaveFontFileError
from termfont.utils.log_config import get_logger

log = get_logger(__name__)


def partial_path(font_dir: Path, font_name: str) -> Path:
    return font_dir / f".{font_name}{FONT_SUFFIX}.part"


def install_font(source: Path, font_name: str, font_dir: Path) -> Path:
    """
    Copies ``source`` to ``font_dir/<font_name>.ttf``.

    The bytes land in a hidden partial file first and are then swapped in
    with ``os.replace``, so a failed copy leaves any previous install intact.
    """
    try:
        check_font_name(font_name)
    except ValueError as e:
        raise SaveFontFileError(font_name, str(e)) from e

    destination = font_dir / f"{font_name}{FONT_SUFFIX}"
    partial = partial_path(font_dir, font_name)

    if destination.exists():
        log.info("font save path %s already exists, replacing it", destination)

    log.info("saving font %s at %s", font_name, destination)
    try:
        shutil.copyfile(source, partial)
        os.replace(partial, destination)
    except OSError as e:
        try:
            partial.unlink()
        except FileNotFoundError:
            pass
        except OSError as cleanup_error:
            log.warning("could not delete partial font file %s: %s", partial, cleanup_error)
        raise SaveFontFileError(destination, str(e)) from e

    return destination
