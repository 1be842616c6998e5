from __future__ import annotations


class CheckError(RuntimeError):
    """Base class for a failed browser check run."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NavigationError(CheckError):
    """Navigation never produced a response (DNS, TLS, refused, timeout)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Navigation to {url} failed: {reason}", url=url)
        self.reason = reason


class CheckFailure(CheckError):
    """A response arrived but its status code signals failure."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(
            f"Failed with response code {status_code}", url=url, status_code=status_code
        )


class ArtifactWriteError(CheckError):
    def __init__(self, url: str, path: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(
            f"Could not write screenshot to {path}: {reason}",
            url=url,
            status_code=status_code,
        )
        self.path = path
