import os
from pathlib import Path

from termfont.utils.exceptions import FontNotFoundError, WalkTemporaryDirectoryError
from termfont.utils.log_config import get_logger

log = get_logger(__name__)

REGULAR_SUFFIX = "NerdFont-Regular.ttf"


def expected_member_name(font_name: str) -> str:
    """'0xProto' -> '0xProtoNerdFont-Regular.ttf'"""
    return f"{font_name}{REGULAR_SUFFIX}"


def locate_font(root: Path, font_name: str) -> Path:
    """
    Walks the extracted archive and returns the regular-weight font file.
    Only an exact, case-sensitive base-name match counts.
    """
    expected = expected_member_name(font_name)

    def _raise(error: OSError) -> None:
        raise WalkTemporaryDirectoryError(root, str(error)) from error

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        if expected in filenames:
            candidate = Path(dirpath) / expected
            if candidate.is_file() and not candidate.is_symlink():
                log.debug("found %s at %s", expected, candidate)
                return candidate

    raise FontNotFoundError(font_name, root)
