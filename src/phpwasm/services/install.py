import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..domain.errors import PhpWasmError
from ..domain.models import InstalledPackage, ReleaseConfig, WrittenFile
from ..resolution.resolver import VersionResolver
from ..ui.progress import ProgressSink
from .fetch import ArtifactFetcher

logger = logging.getLogger(__name__)


class InstallService:
    """resolves the installed php-wasm version and fetches its release artifacts."""

    def __init__(
        self,
        resolver: VersionResolver,
        fetcher: ArtifactFetcher,
        sink: ProgressSink,
        release: Optional[ReleaseConfig] = None,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.sink = sink
        self.release = release or ReleaseConfig()

    def install(self, packages: Sequence[InstalledPackage], package_name: str, target_dir: Path) -> List[WrittenFile]:
        """
        install the artifacts matching package_name's version.

        args:
            packages: installed package snapshot from the host.
            package_name: package whose version selects the release.
            target_dir: directory the artifacts are written to.

        returns:
            the written files, in artifact order.
        """
        try:
            version = self.resolver.resolve(packages, package_name)
        except PhpWasmError as e:
            self.sink.write_error(f"Error resolving PHP WASM version: {e}")
            e.reported = True
            raise
        logger.debug("resolved %s to %s", package_name, version)

        self.sink.write(f"Installing PHP WASM version: {version}")
        return self.fetcher.fetch(version, self.release, target_dir)
