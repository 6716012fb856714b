from typing import Sequence

from ..domain.errors import ConfigError, PackageNotFoundError
from ..domain.models import InstalledPackage


class VersionResolver:
    """looks up the installed version of a package in a dependency snapshot."""

    def resolve(self, packages: Sequence[InstalledPackage], target_name: str) -> str:
        """
        return the normalized version of target_name.

        args:
            packages: installed packages, in the order the host reported them.
            target_name: exact (case-sensitive) package name to look for.

        returns:
            the normalized version of the first matching package.

        raises:
            ConfigError: if target_name is empty.
            PackageNotFoundError: if no package in the snapshot matches.
        """
        if not target_name:
            raise ConfigError("Package name to resolve cannot be empty")

        for package in packages:
            if package.name == target_name:
                return package.normalized_version

        raise PackageNotFoundError(target_name)
