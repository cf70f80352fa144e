from typing import BinaryIO, Optional

import requests

from termfont.config.settings import FontSettings
from termfont.utils.exceptions import InvalidHttpResponseError
from termfont.utils.log_config import get_logger

log = get_logger(__name__)


class ArchiveFetcher:
    """
    Streams Nerd Font release archives from the remote release endpoint.
    """

    def __init__(self, settings: Optional[FontSettings] = None) -> None:
        self.settings: FontSettings = settings or FontSettings()

    def archive_url(self, font_name: str) -> str:
        return f"{self.settings.base_url}{font_name}.zip"

    def fetch(self, font_name: str, sink: BinaryIO) -> int:
        """
        Download the archive for ``font_name`` into ``sink``.
        Returns the number of bytes written. The sink may hold partial data
        when this raises.
        """
        url = self.archive_url(font_name)
        log.info("fetching %s...", url)

        try:
            response = requests.get(
                url,
                stream=True,
                timeout=self.settings.timeout,
                headers={"User-Agent": self.settings.user_agent},
            )
        except requests.RequestException as e:
            raise InvalidHttpResponseError(url, detail=str(e)) from e

        written = 0
        with response:
            if response.status_code != requests.codes.ok:
                raise InvalidHttpResponseError(url, response.status_code)

            try:
                for chunk in response.iter_content(chunk_size=self.settings.buffer_size):
                    if chunk:
                        sink.write(chunk)
                        written += len(chunk)
            except requests.RequestException as e:
                raise InvalidHttpResponseError(url, detail=str(e)) from e

        log.debug("fetched %d bytes from %s", written, url)
        return written
