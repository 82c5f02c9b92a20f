"""
Raw content fetching from the filesystem or over HTTP.
"""

from pathlib import Path
from typing import Optional, Union

import requests

from resume_content.utils.file_utils import read_text
from resume_content.utils.logger import get_logger

logger = get_logger(__name__)


class ContentSourceError(Exception):
    """Raised when raw content cannot be read."""


class ContentNotFoundError(ContentSourceError):
    """Raised when the requested content does not exist."""


class ContentSource:
    """Interface for anything that can return raw Markdown or JSON text by name."""

    def fetch(self, name: str) -> str:
        raise NotImplementedError

    def describe(self, name: str) -> str:
        return name


class FileContentSource(ContentSource):
    """Read content files from a local directory."""

    def __init__(self, base_dir: Union[Path, str]):
        self.base_dir = Path(base_dir)
        logger.debug(f"File content source initialized at {self.base_dir}")

    def describe(self, name: str) -> str:
        return str(self.base_dir / name)

    def fetch(self, name: str) -> str:
        """
        Read a file relative to the base directory.

        Args:
            name: File name, e.g. ``resume-en.md``

        Returns:
            File contents

        Raises:
            ContentNotFoundError: If the file does not exist
            ContentSourceError: If the file cannot be read or decoded
        """
        path = self.base_dir / name
        try:
            return read_text(path)
        except FileNotFoundError:
            raise ContentNotFoundError(f"Content not found: {path}")
        except (OSError, UnicodeDecodeError) as e:
            raise ContentSourceError(f"Could not read {path}: {e}")


class HttpContentSource(ContentSource):
    """Fetch content files from a static site or CDN."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize HTTP content source.

        Args:
            base_url: URL prefix content names are appended to
            timeout: Per-request timeout in seconds
            session: Optional requests session (connection reuse, testing)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {'Accept': 'application/json, text/markdown, text/plain;q=0.9'}
        logger.debug(f"HTTP content source initialized for {self.base_url}")

    def describe(self, name: str) -> str:
        return f"{self.base_url}/{name}"

    def fetch(self, name: str) -> str:
        """
        GET a content file.

        Raises:
            ContentNotFoundError: On HTTP 404
            ContentSourceError: On timeouts, connection failures and other HTTP errors
        """
        url = self.describe(name)
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.Timeout:
            raise ContentSourceError(f"Timed out after {self.timeout}s fetching {url}")
        except requests.RequestException as e:
            raise ContentSourceError(f"Request failed for {url}: {e}")

        if response.status_code == 404:
            raise ContentNotFoundError(f"Content not found: {url}")
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise ContentSourceError(f"HTTP error for {url}: {e}")

        response.encoding = response.encoding or 'utf-8'
        return response.text
