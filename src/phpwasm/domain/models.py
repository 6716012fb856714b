import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

# leading "v" and any pre-release tail, e.g. "v1.2.3-beta.4" -> "1.2.3"
_VERSION_NOISE = re.compile(r"^v+|(-dev|-alpha|-beta).*$")

DEFAULT_URL_PATTERN = (
    "https://github.com/Syntaxx-HQ/PHPX-phpwasmbuilder/releases/download/"
    "v{version}/php-vrzno-web.{kind}"
)
DEFAULT_ARTIFACTS = {
    "mjs": "php-vrzno-web.mjs",
    "wasm": "php-vrzno-web.wasm",
}
DEFAULT_USER_AGENT = "Composer/1.0"


def normalize_version(raw: str) -> str:
    """strip a leading 'v' and any -dev/-alpha/-beta suffix from a version string."""
    return _VERSION_NOISE.sub("", raw)


class RequirementEntry(BaseModel):
    """a declared requirement; carried through but not used for selection."""
    model_config = ConfigDict(frozen=True)

    name: str
    constraint: str = "*"


class InstalledPackage(BaseModel):
    """an installed package as reported by the host's dependency snapshot."""
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    requires: List[RequirementEntry] = Field(default_factory=list)

    @property
    def normalized_version(self) -> str:
        return normalize_version(self.version)


class ReleaseConfig(BaseModel):
    """where release artifacts live and what they are called once downloaded."""
    url_pattern: str = DEFAULT_URL_PATTERN
    artifacts: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ARTIFACTS))
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("url_pattern")
    @classmethod
    def _check_placeholders(cls, value: str) -> str:
        for placeholder in ("{version}", "{kind}"):
            if placeholder not in value:
                raise ValueError(f"url pattern is missing the {placeholder} placeholder")
        return value

    @field_validator("artifacts")
    @classmethod
    def _check_artifacts(cls, value: Dict[str, str]) -> Dict[str, str]:
        if not value:
            raise ValueError("at least one artifact must be configured")
        for kind, filename in value.items():
            if not filename or Path(filename).name != filename:
                raise ValueError(f"artifact '{kind}' needs a plain file name, got {filename!r}")
        return value

    def artifact_url(self, version: str, kind: str) -> str:
        return self.url_pattern.format(version=version, kind=kind)


class WrittenFile(BaseModel):
    kind: str
    path: Path
    size: int


def root_first(root: Optional[InstalledPackage], packages: Sequence[InstalledPackage]) -> List[InstalledPackage]:
    """the dependency snapshot, with the root package in front when there is one."""
    if root is None:
        return list(packages)
    return [root, *packages]
