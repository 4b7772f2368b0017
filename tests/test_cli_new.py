"""Tests for the `sprout new` command."""
import json

import pytest
import typer
from typer.testing import CliRunner

from sprout.cli import app
from sprout.cli_support import parse_dependency_spec
from sprout.core.logger import configure_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def mock_mode(monkeypatch):
    """Never spawn git from CLI tests."""
    monkeypatch.setenv("SPROUT_MOCK", "1")
    monkeypatch.delenv("npm_execpath", raising=False)
    monkeypatch.delenv("SPROUT_TYPESCRIPT", raising=False)
    monkeypatch.delenv("SPROUT_COMPONENTS_DIR", raising=False)


class TestParseDependencySpec:
    """name / name@version parsing."""

    @pytest.mark.parametrize("spec,expected", [
        ("react", ("react", None)),
        ("react@18.2.0", ("react", "18.2.0")),
        ("react@^18.2.0", ("react", "^18.2.0")),
        ("@shopify/prettier-config", ("@shopify/prettier-config", None)),
        ("@shopify/prettier-config@1.1.2", ("@shopify/prettier-config", "1.1.2")),
    ])
    def test_parse(self, spec, expected):
        assert parse_dependency_spec(spec) == expected

    @pytest.mark.parametrize("spec", ["", "react@", "@"])
    def test_invalid(self, spec):
        with pytest.raises(typer.BadParameter):
            parse_dependency_spec(spec)


class TestNewCommand:
    """End-to-end CLI runs in mock mode."""

    def test_help(self):
        result = runner.invoke(app, ["new", "--help"])

        assert result.exit_code == 0
        assert "--dev-dep" in result.stdout
        assert "--typescript" in result.stdout

    def test_creates_project(self, temp_dir):
        result = runner.invoke(app, [
            "new", "my-app",
            "--path", str(temp_dir),
            "--dep", "react@^18.2.0",
            "--dev-dep", "eslint",
            "--dev-dep", "@shopify/prettier-config",
        ])

        assert result.exit_code == 0, result.output
        assert "Created my-app" in result.stdout

        project = temp_dir / "my-app"
        assert (project / ".gitignore").exists()

        manifest = json.loads((project / "package.json").read_text())
        assert manifest["name"] == "my-app"
        assert manifest["dependencies"] == {"react": "^18.2.0"}
        assert manifest["devDependencies"] == {
            "eslint": "latest",
            "@shopify/prettier-config": "latest",
        }
        assert manifest["prettier"] == "@shopify/prettier-config"
        assert manifest["scripts"]["lint"].startswith("eslint ")

    def test_merges_into_existing_project(self, temp_dir):
        project = temp_dir / "my-app"
        project.mkdir()
        (project / "package.json").write_text(json.dumps({"license": "MIT", "private": True}))

        result = runner.invoke(app, ["new", "my-app", "--path", str(temp_dir)])

        assert result.exit_code == 0, result.output
        manifest = json.loads((project / "package.json").read_text())
        assert manifest["license"] == "MIT"
        assert manifest["private"] is True
        assert manifest["scripts"]["dev"] == "vite"

    def test_next_step_uses_package_manager(self, temp_dir, monkeypatch):
        monkeypatch.setenv("npm_execpath", "/usr/lib/node_modules/yarn/bin/yarn.js")

        result = runner.invoke(app, ["new", "my-app", "--path", str(temp_dir)])

        assert result.exit_code == 0, result.output
        assert "yarn install" in result.stdout

    def test_malformed_manifest_reports_error(self, temp_dir):
        project = temp_dir / "my-app"
        project.mkdir()
        (project / "package.json").write_text("{broken")

        result = runner.invoke(app, ["new", "my-app", "--path", str(temp_dir)])

        assert result.exit_code == 1
        assert "Error:" in result.stdout

    def test_bad_dependency_spec_is_usage_error(self, temp_dir):
        result = runner.invoke(app, ["new", "my-app", "--path", str(temp_dir), "--dep", "react@"])

        assert result.exit_code == 2
        assert not (temp_dir / "my-app").exists()

    def test_config_file(self, temp_dir):
        config = temp_dir / "sprout.yml"
        config.write_text("framework: vue\n")

        result = runner.invoke(app, ["new", "my-app", "--path", str(temp_dir), "--config", str(config)])

        assert result.exit_code == 1
        assert "unknown settings" in result.stdout

    def test_log_file(self, temp_dir):
        log_file = temp_dir / "logs" / "sprout.log"

        result = runner.invoke(app, [
            "new", "my-app", "--path", str(temp_dir), "--log-file", str(log_file),
        ])
        configure_logging()

        assert result.exit_code == 0, result.output
        content = log_file.read_text(encoding="utf-8")
        assert "MOCK: Would run 'git init'" in content
        assert "Wrote package.json" in content
