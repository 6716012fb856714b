import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..config import load_install_config
from ..domain.models import ReleaseConfig, WrittenFile
from ..registry.client import ReleaseTransport
from ..registry.github import HttpxTransport
from ..resolution.resolver import VersionResolver
from ..services.fetch import ArtifactFetcher
from ..services.install import InstallService
from ..ui.progress import ProgressSink
from .events import InstallEvent, POST_INSTALL_CMD, POST_UPDATE_CMD

logger = logging.getLogger(__name__)

TransportFactory = Callable[[float], ReleaseTransport]


class Plugin:
    """host-facing adapter: subscribes to install/update events and runs the installer."""

    def __init__(
        self,
        transport_factory: TransportFactory = HttpxTransport,
        release: Optional[ReleaseConfig] = None,
        target_dir: Optional[Path] = None,
        http_timeout: Optional[float] = None,
    ):
        """
        args:
            transport_factory: builds a transport from a timeout in seconds.
            release: url pattern and artifact table; defaults to the php-wasm releases.
            target_dir: overrides extra.php-wasm.target-dir.
            http_timeout: overrides extra.php-wasm.http-timeout.
        """
        self.transport_factory = transport_factory
        self.release = release or ReleaseConfig()
        self.target_dir = target_dir
        self.http_timeout = http_timeout

    def activate(self, io: ProgressSink) -> None:
        logger.debug("php-wasm plugin activated")

    def deactivate(self, io: ProgressSink) -> None:
        logger.debug("php-wasm plugin deactivated")

    def uninstall(self, io: ProgressSink) -> None:
        # downloaded artifacts belong to the project and are left in place
        logger.debug("php-wasm plugin uninstalled")

    @staticmethod
    def get_subscribed_events() -> Dict[str, str]:
        return {
            POST_INSTALL_CMD: "on_post_install_cmd",
            POST_UPDATE_CMD: "on_post_install_cmd",
        }

    def dispatch(self, event: InstallEvent) -> Optional[List[WrittenFile]]:
        """route event to its handler; events we do not subscribe to are ignored."""
        handler_name = self.get_subscribed_events().get(event.name)
        if handler_name is None:
            logger.debug("ignoring event %s", event.name)
            return None
        return getattr(self, handler_name)(event)

    def on_post_install_cmd(self, event: InstallEvent) -> List[WrittenFile]:
        config = load_install_config(event.extra, self.target_dir, self.http_timeout)
        project_dir = Path(event.project_dir) if event.project_dir else Path.cwd()
        target_dir = config.resolve_target_dir(project_dir)

        with self.transport_factory(config.http_timeout) as transport:
            service = InstallService(
                VersionResolver(),
                ArtifactFetcher(transport, event.io),
                event.io,
                self.release,
            )
            return service.install(event.snapshot(), config.package, target_dir)
