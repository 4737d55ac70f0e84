"""HTTP client for listing pages and single-attempt streaming file downloads."""

import logging
import os
from typing import Optional

import httpx

from .config import AppConfig
from .exceptions import DownloadError, DownloadWarning, FetchError

logger = logging.getLogger("scheme_scraper")


class Downloader:
    def __init__(self, config: AppConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.config.download.timeout,
                                      connect=self.config.download.connect_timeout),
                follow_redirects=True,
                headers={"User-Agent": self.config.download.user_agent},
                transport=self._transport,
            )
        return self._client

    def close(self):
        if self._client and not self._client.is_closed:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def fetch_text(self, url: str) -> str:
        """Fetch a directory listing page. Raises FetchError on any HTTP failure."""
        logger.debug(f"GET {url}")
        try:
            resp = self.client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"Could not fetch {url}: {_status_message(e.response)}", url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Could not fetch {url}: {e}", url=url) from e
        return resp.text

    def download_file(self, url: str, local_path: str) -> int:
        """Stream `url` into `local_path`, one attempt only. Returns the number of bytes written.

        Raises DownloadError when the request or the local write fails, and DownloadWarning when
        the server sent a different number of bytes than its Content-Length announced. Nothing is
        left at `local_path` in either case.
        """
        size = 0
        expected = None
        received = 0
        try:
            with self.client.stream("GET", url) as resp:
                resp.raise_for_status()

                content_length = resp.headers.get("content-length")
                if content_length and content_length.isdigit():
                    expected = int(content_length)

                with open(local_path, "wb") as f:
                    for chunk in resp.iter_bytes(chunk_size=self.config.download.chunk_size):
                        f.write(chunk)
                        size += len(chunk)
                received = resp.num_bytes_downloaded
        except httpx.HTTPStatusError as e:
            self._discard(local_path)
            raise DownloadError(_status_message(e.response), url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, OSError, ValueError) as e:
            self._discard(local_path)
            raise DownloadError(_one_line(e), url=url) from e

        if expected is not None and received != expected:
            self._discard(local_path)
            raise DownloadWarning(f"received {received} of {expected} bytes", url=url)

        return size

    @staticmethod
    def _discard(local_path: str):
        if os.path.isfile(local_path):
            os.remove(local_path)


def _status_message(resp: httpx.Response) -> str:
    return f"HTTP {resp.status_code} {resp.reason_phrase}".strip()


def _one_line(e: Exception) -> str:
    return " ".join(str(e).split()) or type(e).__name__
