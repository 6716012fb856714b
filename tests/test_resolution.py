"""test suite for version resolution."""
import pytest

from phpwasm.domain.errors import ConfigError, PackageNotFoundError
from phpwasm.domain.models import InstalledPackage, RequirementEntry
from phpwasm.resolution.resolver import VersionResolver


class TestVersionResolver:
    @pytest.fixture
    def resolver(self):
        return VersionResolver()

    @pytest.fixture
    def packages(self):
        return [
            InstalledPackage(name="psr/log", version="3.0.0"),
            InstalledPackage(
                name="syntaxx/php-wasm",
                version="v0.4.1-beta.2",
                requires=[RequirementEntry(name="php", constraint="^8.1")],
            ),
            InstalledPackage(name="monolog/monolog", version="3.5.0"),
        ]

    def test_single_entry(self, resolver):
        packages = [InstalledPackage(name="pkg/a", version="v1.2.3-dev.4")]
        assert resolver.resolve(packages, "pkg/a") == "1.2.3"

    def test_finds_package_among_others(self, resolver, packages):
        assert resolver.resolve(packages, "syntaxx/php-wasm") == "0.4.1"

    @pytest.mark.parametrize("name", ["pkg/a", "syntaxx/php-wasm", "anything"])
    def test_empty_snapshot(self, resolver, name):
        with pytest.raises(PackageNotFoundError) as exc_info:
            resolver.resolve([], name)
        assert exc_info.value.package_name == name

    def test_missing_package(self, resolver, packages):
        with pytest.raises(PackageNotFoundError) as exc_info:
            resolver.resolve(packages, "nonexistent/pkg")
        assert "nonexistent/pkg" in str(exc_info.value)

    def test_case_sensitive(self, resolver, packages):
        with pytest.raises(PackageNotFoundError):
            resolver.resolve(packages, "Syntaxx/PHP-Wasm")

    def test_first_duplicate_wins(self, resolver):
        packages = [
            InstalledPackage(name="pkg/a", version="1.0.0"),
            InstalledPackage(name="pkg/a", version="2.0.0"),
        ]
        assert resolver.resolve(packages, "pkg/a") == "1.0.0"

    def test_empty_name_rejected(self, resolver, packages):
        with pytest.raises(ConfigError):
            resolver.resolve(packages, "")

    def test_snapshot_not_mutated(self, resolver, packages):
        before = [p.model_dump() for p in packages]
        resolver.resolve(packages, "syntaxx/php-wasm")
        assert [p.model_dump() for p in packages] == before


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
