"""
Scratch state for one font installation.

``ScratchSpace`` owns ``<prefix>/tmp/`` and ``<prefix>/tmp.zip`` for the
lifetime of a ``with`` block. Leftovers from a crashed run are cleared on
entry, and both paths are removed on every exit path. Teardown problems
are logged, never raised, so they cannot hide the real outcome.
"""

import shutil
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Optional, Type

from termfont.config.settings import PrefixLayout
from termfont.utils.exceptions import (
    CreateFontDirectoryError,
    CreateTemporaryDirectoryError,
    CreateTemporaryZipFileError,
    DeleteTemporaryDirectoryError,
    DeleteTemporaryZipFileError,
)
from termfont.utils.log_config import get_logger

log = get_logger(__name__)


class ScratchSpace:
    def __init__(self, layout: PrefixLayout, buffer_size: int = -1) -> None:
        self.layout = layout
        self.buffer_size = buffer_size
        self.directory: Path = layout.scratch_dir
        self.archive_path: Path = layout.scratch_archive
        self.archive: Optional[BinaryIO] = None

    def __enter__(self) -> "ScratchSpace":
        try:
            self._clear_leftovers()
            self._create()
            self._ensure_font_dir()
        except BaseException:
            self._teardown()
            raise
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self._teardown()

    def _clear_leftovers(self) -> None:
        # a symlink or plain file is unlinked, never followed
        if self.directory.is_symlink() or self.directory.is_file():
            self._unlink_leftover(self.directory, DeleteTemporaryDirectoryError)
        else:
            try:
                shutil.rmtree(self.directory)
                log.debug("deleted leftover %s", self.directory)
            except FileNotFoundError:
                pass
            except OSError as e:
                raise DeleteTemporaryDirectoryError(self.directory, str(e)) from e

        self._unlink_leftover(self.archive_path, DeleteTemporaryZipFileError)

    @staticmethod
    def _unlink_leftover(path: Path, error: type) -> None:
        try:
            path.unlink()
            log.debug("deleted leftover %s", path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise error(path, str(e)) from e

    def _create(self) -> None:
        log.debug("creating %s", self.directory)
        try:
            self.directory.mkdir()
        except OSError as e:
            raise CreateTemporaryDirectoryError(self.directory, str(e)) from e

        log.debug("creating %s", self.archive_path)
        try:
            self.archive = open(self.archive_path, "w+b", buffering=self.buffer_size)
        except OSError as e:
            raise CreateTemporaryZipFileError(self.archive_path, str(e)) from e

    def _ensure_font_dir(self) -> None:
        font_dir = self.layout.font_dir
        if font_dir.is_dir():
            return
        log.debug("%s doesn't exist, creating it", font_dir)
        try:
            font_dir.mkdir(exist_ok=True)
        except OSError as e:
            raise CreateFontDirectoryError(font_dir, str(e)) from e

    def _teardown(self) -> None:
        if self.archive is not None:
            try:
                self.archive.close()
            except OSError as e:
                log.warning("could not close %s: %s", self.archive_path, e)
            self.archive = None

        log.debug("deleting %s", self.directory)
        try:
            shutil.rmtree(self.directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning("could not delete %s: %s", self.directory, e)

        log.debug("deleting %s", self.archive_path)
        try:
            self.archive_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning("could not delete %s: %s", self.archive_path, e)
