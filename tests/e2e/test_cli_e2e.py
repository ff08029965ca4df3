from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and the artifacts saved by export commands.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "workspace_vfs" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and points HOME at a
    temporary directory so the user data dir stays isolated.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        home: Directory used as the user's home.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["USERPROFILE"] = str(home)
    env.pop("LOCALAPPDATA", None)
    env.pop("APPDATA", None)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=home,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


def test_e2e_help_exits_cleanly(home: Path) -> None:
    result = run_cli(["--help"], home)
    assert result.returncode == 0
    assert "--script" in result.stdout


def test_e2e_script_builds_and_exports(home: Path) -> None:
    """Run a command script and verify both saved artifacts."""
    out_dir = home / "exports"
    script = home / "session.vfs"
    script.write_text(
        "\n".join([
            "mkdir docs",
            "touch notes.md",
            "edit '# Notes\\nfirst line'",
            "export",
            "download missing-id",
        ]) + "\n",
        encoding="utf-8",
    )

    result = run_cli(
        ["--empty", "--script", str(script), "--export-dir", str(out_dir), "--json"],
        home,
    )

    # The last command names an unknown id
    assert result.returncode == 1, result.stderr
    assert "ERROR: Node not found: missing-id" in result.stdout

    saved = json.loads((out_dir / "project.json").read_text(encoding="utf-8"))
    assert [r["name"] for r in saved] == ["docs", "notes.md"]
    assert saved[1]["content"] == "# Notes\nfirst line"
    assert saved[1]["language"] == "markdown"


def test_e2e_missing_script(home: Path) -> None:
    result = run_cli(["--script", str(home / "missing.vfs")], home)
    assert result.returncode == 2
    assert "Cannot read script" in result.stderr


def test_e2e_dump_config_reflects_saved_values(home: Path) -> None:
    first = run_cli(["--save-config", "--model", "local-coder", "--tree"], home)
    assert first.returncode == 0, first.stderr
    assert "App.tsx" in first.stdout

    result = run_cli(["--dump-config"], home)
    assert result.returncode == 0
    assert json.loads(result.stdout)["assistant_model"] == "local-coder"
    assert (home / ".workspace_vfs" / "config.json").exists()
