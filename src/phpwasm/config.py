from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .domain.errors import ConfigError
from .registry.github import DEFAULT_TIMEOUT

# section of the manifest's "extra" block holding our settings
EXTRA_KEY = "php-wasm"
DEFAULT_PACKAGE_NAME = "syntaxx/php-wasm"
DEFAULT_TARGET_DIR = Path("public") / "wasm"


class InstallConfig(BaseModel):
    """plugin settings, as written under extra.php-wasm in the project manifest."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    target_dir: Path = Field(DEFAULT_TARGET_DIR, alias="target-dir")
    package: str = DEFAULT_PACKAGE_NAME
    http_timeout: float = Field(DEFAULT_TIMEOUT, alias="http-timeout", gt=0)

    @field_validator("package")
    @classmethod
    def _check_package(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("package name cannot be empty")
        return value.strip()

    def resolve_target_dir(self, project_root: Path) -> Path:
        """absolute target directory; relative values are taken from project_root."""
        target = self.target_dir.expanduser()
        if not target.is_absolute():
            target = Path(project_root) / target
        return target.resolve()


def load_install_config(
    extra: Optional[Dict[str, Any]],
    target_dir: Optional[Path] = None,
    http_timeout: Optional[float] = None,
) -> InstallConfig:
    """
    build the install config from a manifest's extra block.

    args:
        extra: the manifest's "extra" mapping, or None.
        target_dir: command line override for target-dir.
        http_timeout: command line override for http-timeout.

    raises:
        ConfigError: if the section is not a mapping or holds invalid values.
    """
    section = (extra or {}).get(EXTRA_KEY) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"extra.{EXTRA_KEY} must be an object, got {type(section).__name__}")

    values = dict(section)
    if target_dir is not None:
        values["target-dir"] = target_dir
    if http_timeout is not None:
        values["http-timeout"] = http_timeout

    try:
        return InstallConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"invalid extra.{EXTRA_KEY} configuration: {e}") from e
