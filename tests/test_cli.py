"""test suite for the command line interface."""
import json

import pytest
from typer.testing import CliRunner

from phpwasm.cli import main as cli_main
from phpwasm.domain.errors import TransportError
from phpwasm.domain.models import ReleaseConfig
from phpwasm.plugin import Plugin

RELEASE = ReleaseConfig()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    (tmp_path / "composer.json").write_text(json.dumps({
        "name": "acme/app",
        "extra": {"php-wasm": {"target-dir": "web/wasm"}},
    }))
    (tmp_path / "composer.lock").write_text(json.dumps({
        "packages": [
            {"name": "syntaxx/php-wasm", "version": "v0.4.1-beta.2", "require": {"php": "^8.1"}},
        ],
        "packages-dev": [],
    }))
    return tmp_path


@pytest.fixture
def use_stub(monkeypatch, stub_transport):
    def get_plugin(target_dir=None, timeout=None):
        return Plugin(
            transport_factory=lambda _timeout: stub_transport,
            target_dir=target_dir,
            http_timeout=timeout,
        )

    monkeypatch.setattr(cli_main, "get_plugin", get_plugin)
    return stub_transport


def serve(transport, version="0.4.1"):
    for kind in RELEASE.artifacts:
        transport.routes[RELEASE.artifact_url(version, kind)] = f"{kind}-{version}".encode()


class TestInstallCommand:
    @pytest.mark.parametrize("command", ["install", "update"])
    def test_downloads_artifacts(self, runner, project, use_stub, command):
        serve(use_stub)

        result = runner.invoke(cli_main.app, [command, "--project-dir", str(project)])

        assert result.exit_code == 0, result.output
        assert "Installing PHP WASM version: 0.4.1" in result.output
        assert "Downloaded php-vrzno-web.mjs" in result.output
        assert "Downloaded php-vrzno-web.wasm" in result.output
        assert (project / "web" / "wasm" / "php-vrzno-web.mjs").read_bytes() == b"mjs-0.4.1"
        assert (project / "web" / "wasm" / "php-vrzno-web.wasm").read_bytes() == b"wasm-0.4.1"

    def test_target_dir_option(self, runner, project, use_stub, tmp_path):
        serve(use_stub)
        target = tmp_path / "custom"

        result = runner.invoke(cli_main.app, ["install", "-d", str(project), "--target-dir", str(target)])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in target.iterdir()) == ["php-vrzno-web.mjs", "php-vrzno-web.wasm"]

    def test_missing_release_fails(self, runner, project, use_stub):
        result = runner.invoke(cli_main.app, ["install", "-d", str(project)])

        assert result.exit_code == 1
        assert "File not found (404)" in result.output
        assert result.output.count("File not found (404)") == 1
        assert not (project / "web" / "wasm" / "php-vrzno-web.mjs").exists()

    def test_network_failure_fails(self, runner, project, use_stub):
        serve(use_stub)
        wasm_url = RELEASE.artifact_url("0.4.1", "wasm")
        use_stub.routes[wasm_url] = TransportError(wasm_url, "connection reset")

        result = runner.invoke(cli_main.app, ["install", "-d", str(project)])

        assert result.exit_code == 1
        assert "connection reset" in result.output
        assert (project / "web" / "wasm" / "php-vrzno-web.mjs").exists()
        assert not (project / "web" / "wasm" / "php-vrzno-web.wasm").exists()

    def test_missing_manifest_fails(self, runner, tmp_path, use_stub):
        result = runner.invoke(cli_main.app, ["install", "-d", str(tmp_path)])

        assert result.exit_code == 1
        assert "composer.json" in result.output
        assert use_stub.calls == []

    def test_package_not_installed_fails(self, runner, project, use_stub):
        (project / "composer.lock").write_text(json.dumps({"packages": []}))

        result = runner.invoke(cli_main.app, ["install", "-d", str(project)])

        assert result.exit_code == 1
        assert "syntaxx/php-wasm" in result.output
        assert result.output.count("is not installed") == 1


class TestResolveCommand:
    def test_prints_version(self, runner, project):
        result = runner.invoke(cli_main.app, ["resolve", "-d", str(project)])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "0.4.1"

    def test_package_option(self, runner, project):
        result = runner.invoke(cli_main.app, ["resolve", "-d", str(project), "--package", "acme/missing"])

        assert result.exit_code == 1
        assert "acme/missing" in result.output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
