"""HTTP client abstraction for artifact downloads.

This module provides:
- HttpClient: Protocol for downloads (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import shutil
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from duke import __version__
from duke.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network and local I/O errors)
        message: Human-readable error message
        target_exists: The destination was already taken, nothing was written
    """

    url: str
    status: int
    message: str
    target_exists: bool = False

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP downloads."""

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Download URL to a new file at dest.

        Args:
            url: URL to download
            dest: Destination path; must not exist yet

        Returns:
            Ok with dest path, or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Redirects are followed by urllib itself. The destination is opened in
    exclusive-create mode, so an existing file is never overwritten.
    """

    def __init__(self, timeout: float | None = None, user_agent: str | None = None) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Socket timeout in seconds (None waits indefinitely)
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        self.user_agent = user_agent or f"duke/{__version__}"
        self._ssl_context = ssl.create_default_context()

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Stream URL into dest."""
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "xb") as f:
                    shutil.copyfileobj(response, f)
            return Ok(dest)
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except FileExistsError:
            return Err(
                HttpError(
                    url=url,
                    status=0,
                    message=f"Target already exists: {dest}",
                    target_exists=True,
                )
            )
        except http.client.HTTPException as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_download("https://example.com/a.jar", b"content")
        client.download("https://example.com/a.jar", tmp_path / "a.jar")
        assert client.calls == [("download", "https://example.com/a.jar")]
    """

    def __init__(self) -> None:
        self._download_responses: dict[str, bytes | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        """Set download content for URL."""
        self._download_responses[url] = response

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Mock download - writes predefined content to dest."""
        self.calls.append(("download", url))

        if url not in self._download_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._download_responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        return Ok(dest)
