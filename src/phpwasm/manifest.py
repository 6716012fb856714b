"""reading the host's project manifest and lock file."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .domain.errors import ConfigError
from .domain.models import InstalledPackage, RequirementEntry, root_first

MANIFEST_FILE = "composer.json"
LOCK_FILE = "composer.lock"


class ProjectManifest(BaseModel):
    """the root project plus everything its lock file says is installed."""
    root_dir: Path
    name: Optional[str] = None
    version: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)
    locked: List[InstalledPackage] = Field(default_factory=list)

    @property
    def root_package(self) -> Optional[InstalledPackage]:
        """the root project as a package, when it declares both a name and a version."""
        if not self.name or not self.version:
            return None
        return InstalledPackage(name=self.name, version=self.version)

    def snapshot(self) -> List[InstalledPackage]:
        """locked packages, with the root package first when it has a version."""
        return root_first(self.root_package, self.locked)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(f"failed to read {path}: {e}") from e


def parse_locked_package(entry: Any) -> InstalledPackage:
    """turn one lock file entry into an InstalledPackage."""
    if not isinstance(entry, dict) or not entry.get("name"):
        raise ConfigError(f"lock file entry without a package name: {entry!r}")

    requires = [
        RequirementEntry(name=name, constraint=str(constraint))
        for name, constraint in (entry.get("require") or {}).items()
    ]
    return InstalledPackage(
        name=entry["name"],
        version=str(entry.get("version", "")),
        requires=requires,
    )


def load_manifest(project_dir: Path) -> ProjectManifest:
    """
    load composer.json and, when present, composer.lock from project_dir.

    raises:
        ConfigError: if the manifest is missing or either file is malformed.
    """
    project_dir = Path(project_dir).resolve()
    manifest_path = project_dir / MANIFEST_FILE
    if not manifest_path.exists():
        raise ConfigError(f"no {MANIFEST_FILE} found in {project_dir}")

    data = _read_json(manifest_path)
    if not isinstance(data, dict):
        raise ConfigError(f"{manifest_path} must contain a JSON object")

    extra = data.get("extra") or {}
    if not isinstance(extra, dict):
        raise ConfigError(f"'extra' in {manifest_path} must be an object")

    locked = []
    lock_path = project_dir / LOCK_FILE
    if lock_path.exists():
        lock_data = _read_json(lock_path)
        if not isinstance(lock_data, dict):
            raise ConfigError(f"{lock_path} must contain a JSON object")
        # runtime packages come before dev packages, as the host lists them
        for section in ("packages", "packages-dev"):
            for entry in lock_data.get(section) or []:
                locked.append(parse_locked_package(entry))

    return ProjectManifest(
        root_dir=project_dir,
        name=data.get("name"),
        version=data.get("version"),
        extra=extra,
        locked=locked,
    )
