"""Tests for the command line interface."""
import pytest
from typer.testing import CliRunner

from main import app

runner = CliRunner()

WORKSPACE = "catalog:\n  lodash: ^4.17.0 # utils\ncatalogs:\n  react17:\n    react: ^17.0.0\n"

@pytest.fixture
def workspace(tmp_path):
    """Write a workspace file holding both catalog sections."""
    path = tmp_path / "pnpm-workspace.yaml"
    path.write_text(WORKSPACE)
    return path

def test_upgrade_writes_file(workspace):
    """Test that an upgrade rewrites only the version."""
    result = runner.invoke(app, ["upgrade", str(workspace), "catalogs", "react17", "react", "--to", "^17.0.2"])
    assert result.exit_code == 0
    assert "Upgraded" in result.output
    assert workspace.read_text() == WORKSPACE.replace("^17.0.0", "^17.0.2")

def test_upgrade_dry_run_prints_file(workspace):
    """Test that dry run prints the new contents and leaves the file alone."""
    result = runner.invoke(app, ["upgrade", str(workspace), "catalog", "lodash", "--to", "^4.17.21", "--dry-run"])
    assert result.exit_code == 0
    assert "lodash: ^4.17.21 # utils" in result.output
    assert workspace.read_text() == WORKSPACE

def test_upgrade_already_current(workspace):
    """Test the no-op message."""
    result = runner.invoke(app, ["upgrade", str(workspace), "catalog", "lodash", "--to", "^4.17.0"])
    assert result.exit_code == 0
    assert "already at" in result.output
    assert workspace.read_text() == WORKSPACE

def test_upgrade_unknown_dependency_fails(workspace):
    """Test that an entry that cannot be rewritten exits with an error."""
    result = runner.invoke(app, ["upgrade", str(workspace), "catalog", "express", "--to", "^4.0.0"])
    assert result.exit_code == 1
    assert workspace.read_text() == WORKSPACE

def test_upgrade_malformed_yaml_fails(tmp_path):
    """Test that a syntax error exits with an error and leaves the file alone."""
    path = tmp_path / "pnpm-workspace.yaml"
    path.write_text("not: valid: yaml: [")
    result = runner.invoke(app, ["upgrade", str(path), "catalog", "lodash", "--to", "^4.0.0"])
    assert result.exit_code == 1
    assert path.read_text() == "not: valid: yaml: ["

def test_upgrade_missing_file(tmp_path):
    """Test that a missing file exits with an error."""
    result = runner.invoke(app, ["upgrade", str(tmp_path / "missing.yaml"), "catalog", "lodash", "--to", "1"])
    assert result.exit_code == 1

def test_list_dependencies(workspace):
    """Test listing all catalog entries."""
    result = runner.invoke(app, ["list", str(workspace)])
    assert result.exit_code == 0
    assert "lodash" in result.output
    assert "react17" in result.output

def test_list_dependencies_by_catalog(workspace):
    """Test filtering the listing to one named catalog."""
    result = runner.invoke(app, ["list", str(workspace), "--catalog", "react17"])
    assert result.exit_code == 0
    assert "react" in result.output
    assert "lodash" not in result.output
