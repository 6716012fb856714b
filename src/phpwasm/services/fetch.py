import logging
import os
import uuid
from contextlib import nullcontext, suppress
from pathlib import Path
from typing import List

from ..domain.errors import FetchError, TransportError
from ..domain.models import ReleaseConfig, WrittenFile
from ..registry.client import ReleaseTransport
from ..ui.progress import ProgressSink

logger = logging.getLogger(__name__)


def atomic_write_bytes(path: Path, content: bytes) -> int:
    """write content next to path under a temporary name, then swap it into place."""
    temp_path = path.with_name(f"{path.name}.part.{uuid.uuid4().hex}")
    try:
        with temp_path.open("wb") as handle:
            handle.write(content)
        os.replace(temp_path, path)
    finally:
        with suppress(FileNotFoundError):
            temp_path.unlink()
    return len(content)


class ArtifactFetcher:
    """downloads the release artifacts of one version into a directory."""

    def __init__(self, transport: ReleaseTransport, sink: ProgressSink):
        self.transport = transport
        self.sink = sink

    def fetch(self, version: str, release: ReleaseConfig, target_dir: Path) -> List[WrittenFile]:
        """
        download every configured artifact for version into target_dir.

        artifacts are fetched one after another in configuration order. the
        first failure is reported to the sink and re-raised; files written
        before it stay on disk.

        args:
            version: normalized version, substituted into the url pattern.
            release: url pattern, artifact table and client header.
            target_dir: destination directory, created if missing.

        returns:
            the files written, in order.

        raises:
            FetchError: on the first network, http or filesystem failure.
        """
        target_dir = Path(target_dir).resolve()
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = FetchError.filesystem(target_dir, e)
            self.sink.write_error(f"Error creating {target_dir}: {error}")
            error.reported = True
            raise error from e

        written = []
        for kind, filename in release.artifacts.items():
            try:
                written.append(self._fetch_one(version, release, kind, target_dir / filename))
            except FetchError as e:
                self.sink.write_error(f"Error downloading {filename}: {e}")
                e.reported = True
                raise
        return written

    def _fetch_one(self, version: str, release: ReleaseConfig, kind: str, target_path: Path) -> WrittenFile:
        url = release.artifact_url(version, kind)
        content = self._download(url, release.user_agent)

        try:
            size = atomic_write_bytes(target_path, content)
        except OSError as e:
            raise FetchError.filesystem(target_path, e) from e

        logger.debug("wrote %d bytes to %s", size, target_path)
        self.sink.write(f"Downloaded {target_path.name} to {target_path} ({size} bytes)")
        return WrittenFile(kind=kind, path=target_path, size=size)

    def _download(self, url: str, user_agent: str) -> bytes:
        spinner = getattr(self.sink, "spinner", None)
        with spinner(f"downloading {url}") if spinner else nullcontext():
            try:
                response = self.transport.get(url, headers={"User-Agent": user_agent})
            except TransportError as e:
                raise FetchError.network(url, e) from e

        if response.status_code == 404:
            raise FetchError.not_found(url)
        if response.status_code >= 400:
            raise FetchError.http_error(url, response.status_code, response.content)
        return response.content
