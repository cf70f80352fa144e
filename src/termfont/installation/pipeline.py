import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from termfont.config.settings import FontSettings, PrefixLayout
from termfont.extraction.extractor import extract_archive
from termfont.fetching.fetcher import ArchiveFetcher
from termfont.installation.installer import install_font
from termfont.installation.locator import locate_font
from termfont.installation.scratch import ScratchSpace
from termfont.utils.exceptions import FlushTemporaryZipFileError, SaveFontFileError
from termfont.utils.log_config import get_logger

log = get_logger(__name__)


def download_font(font_name: str, layout: PrefixLayout, fetcher: ArchiveFetcher) -> Path:
    """
    One installation transaction: fetch, extract, locate and install a single
    font. No scratch state survives the call, whatever happens inside it.
    """
    try:
        layout.font_path(font_name)
    except ValueError as e:
        raise SaveFontFileError(font_name, str(e)) from e

    with ScratchSpace(layout, fetcher.settings.buffer_size) as scratch:
        # 1. Download into the scratch archive
        try:
            fetcher.fetch(font_name, scratch.archive)
            scratch.archive.flush()
        except OSError as e:
            raise FlushTemporaryZipFileError(scratch.archive_path, str(e)) from e

        # 2. Expand it next to the archive
        extract_archive(scratch.archive, scratch.directory)

        # 3. Find the regular-weight file and promote it
        source = locate_font(scratch.directory, font_name)
        return install_font(source, font_name, layout.font_dir)


def download_fonts(
    font_names: Sequence[str],
    prefix: os.PathLike,
    settings: Optional[FontSettings] = None,
    callback: Optional[Callable[[str, Path], None]] = None,
) -> List[Path]:
    """
    Installs each font in order. The first failure stops the batch; fonts
    installed before it stay installed.
    """
    layout = PrefixLayout.open(prefix)
    fetcher = ArchiveFetcher(settings)

    installed: List[Path] = []
    for font_name in font_names:
        destination = download_font(font_name, layout, fetcher)
        installed.append(destination)
        if callback:
            callback(font_name, destination)
    return installed
