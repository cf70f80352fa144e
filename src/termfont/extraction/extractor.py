import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Union

from termfont.utils.exceptions import FailedZipExtractionError
from termfont.utils.log_config import get_logger

log = get_logger(__name__)

ArchiveSource = Union[BinaryIO, Path, str]


def extract_archive(archive: ArchiveSource, dest_dir: Path) -> None:
    """
    Expands every entry of a zip archive into ``dest_dir``, keeping the
    archive's internal directory structure. File objects are rewound first.
    """
    if hasattr(archive, "seek"):
        archive.seek(0)

    log.debug("extracting archive into %s", dest_dir)
    try:
        with zipfile.ZipFile(archive, "r") as zip_ref:
            zip_ref.extractall(dest_dir)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError,
            RuntimeError, OSError) as e:
        raise FailedZipExtractionError(dest_dir, str(e)) from e
