from enum import Enum
from pathlib import Path
from typing import Optional

# response bodies are clipped to this many characters in error messages
BODY_EXCERPT_LIMIT = 200


class PhpWasmError(Exception):
    """base class for exceptions in phpwasm."""
    # set once the error has been written to a progress sink
    reported = False


class ConfigError(PhpWasmError):
    """raised when project configuration or package metadata is unusable."""
    pass


class PackageNotFoundError(PhpWasmError):
    """raised when the requested package is absent from the installed snapshot."""
    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package '{package_name}' is not installed")


class TransportError(PhpWasmError):
    """raised by a transport when no HTTP response could be obtained."""
    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class FetchErrorKind(str, Enum):
    NETWORK = "network"
    NOT_FOUND = "not_found"
    HTTP_ERROR = "http_error"
    FILESYSTEM = "filesystem"


class FetchError(PhpWasmError):
    """raised when an artifact cannot be downloaded or written to disk."""
    def __init__(
        self,
        kind: FetchErrorKind,
        message: str,
        url: Optional[str] = None,
        path: Optional[Path] = None,
        status: Optional[int] = None,
        body_excerpt: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.url = url
        self.path = path
        self.status = status
        self.body_excerpt = body_excerpt
        self.cause = cause
        super().__init__(message)

    @classmethod
    def network(cls, url: str, cause: BaseException) -> "FetchError":
        return cls(
            FetchErrorKind.NETWORK,
            f"Failed to download from URL: {url}\nError: {cause}",
            url=url,
            cause=cause,
        )

    @classmethod
    def not_found(cls, url: str) -> "FetchError":
        return cls(
            FetchErrorKind.NOT_FOUND,
            f"File not found (404): {url}\nPlease check if the version exists in the releases.",
            url=url,
            status=404,
        )

    @classmethod
    def http_error(cls, url: str, status: int, body: bytes) -> "FetchError":
        excerpt = body.decode("utf-8", errors="replace")[:BODY_EXCERPT_LIMIT]
        return cls(
            FetchErrorKind.HTTP_ERROR,
            f"HTTP error {status} while downloading: {url}\nResponse: {excerpt}",
            url=url,
            status=status,
            body_excerpt=excerpt,
        )

    @classmethod
    def filesystem(cls, path: Path, cause: OSError) -> "FetchError":
        return cls(
            FetchErrorKind.FILESYSTEM,
            f"Failed to write to: {path}\nError: {cause}",
            path=path,
            cause=cause,
        )
