from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..domain.models import InstalledPackage, root_first
from ..ui.progress import ProgressSink

POST_INSTALL_CMD = "post-install-cmd"
POST_UPDATE_CMD = "post-update-cmd"


@dataclass
class InstallEvent:
    """what the host hands over once dependencies are installed or updated."""
    name: str
    packages: List[InstalledPackage]
    io: ProgressSink
    root_package: Optional[InstalledPackage] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    project_dir: Optional[str] = None

    def snapshot(self) -> List[InstalledPackage]:
        """installed packages, with the root package first when it has a version."""
        return root_first(self.root_package, self.packages)
