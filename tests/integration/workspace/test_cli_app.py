from __future__ import annotations

"""
Integration tests for the CLI application controller.

Runs `main()` end-to-end with persisted configuration and logging
redirected, checking exit codes and printed output.
"""

import json
import sys
from unittest.mock import MagicMock, patch

import pytest

from workspace_vfs.domain import config as cfg_module
from workspace_vfs.interface.cli import app


@pytest.fixture(autouse=True)
def isolated_env(tmp_path):
    """Keep config and logging away from the real user data directory."""
    with patch.object(cfg_module, "CONFIG_FILE", str(tmp_path / "config.json")), \
            patch("workspace_vfs.interface.cli.app.configure_logging") as mock_logging:
        yield mock_logging


def _script(tmp_path, *lines: str) -> str:
    path = tmp_path / "commands.vfs"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


def _completion(text: str) -> MagicMock:
    resp = MagicMock()
    resp.json.return_value = {"choices": [{"text": text}]}
    return resp


def test_script_then_json_export(tmp_path, capsys) -> None:
    script = _script(
        tmp_path,
        "mkdir src",
        "touch a.ts",
        "# move on to editing",
        "edit x=2",
    )
    code = app.main(["--use-defaults", "--empty", "--script", script, "--json", "--export-dir", str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    records = json.loads(out[out.index("[\n"):])
    assert [r["name"] for r in records] == ["src", "a.ts"]
    assert records[1]["content"] == "x=2"
    assert records[1]["language"] == "typescript"


def test_failing_script_command_sets_exit_code(tmp_path) -> None:
    script = _script(tmp_path, "rm nothing-here", "mkdir ok")
    assert app.main(["--use-defaults", "--empty", "--script", script]) == 1


def test_missing_script_is_invalid_input(tmp_path, capsys) -> None:
    code = app.main(["--use-defaults", "--script", str(tmp_path / "absent.vfs")])
    assert code == 2
    assert "Cannot read script" in capsys.readouterr().err


def test_seeded_tree(capsys) -> None:
    assert app.main(["--use-defaults", "--tree"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["└── src/", "    ├── App.tsx  *", "    └── index.css"]


def test_dump_config_applies_overrides(tmp_path, capsys) -> None:
    code = app.main([
        "--use-defaults", "--dump-config",
        "--model", "tiny", "--max-tokens", "12", "--export-dir", str(tmp_path),
    ])
    assert code == 0
    dumped = json.loads(capsys.readouterr().out)
    assert dumped["assistant_model"] == "tiny"
    assert dumped["max_tokens"] == 12
    assert dumped["export_dir"] == str(tmp_path)


def test_out_of_range_override_is_replaced(capsys) -> None:
    app.main(["--use-defaults", "--dump-config", "--temperature", "9"])
    assert json.loads(capsys.readouterr().out)["temperature"] == 0.7


def test_save_config_persists_effective_values(tmp_path) -> None:
    app.main(["--dump-config", "--save-config", "--model", "persisted"])
    # --dump-config returns before saving
    assert cfg_module.load_config()["assistant_model"] == "gpt2"

    app.main(["--save-config", "--model", "persisted", "--tree"])
    assert cfg_module.load_config()["assistant_model"] == "persisted"
    assert app.main(["--dump-config"]) == 0


def test_prompt_creates_generated_file(capsys) -> None:
    with patch("requests.post", return_value=_completion("console.log(1);")) as mock_post:
        code = app.main(["--use-defaults", "--empty", "--prompt", "a logger", "--json"])

    assert code == 0
    assert mock_post.call_args.kwargs["json"]["prompt"] == "// Generate a logger\n"
    out = capsys.readouterr().out
    (record,) = json.loads(out)
    assert record["name"] == "generated.js"
    assert record["content"] == "console.log(1);"


def test_prompt_updates_active_seed_file(capsys) -> None:
    with patch("requests.post", return_value=_completion("export default 1;")):
        assert app.main(["--use-defaults", "--prompt", "a constant", "--json"]) == 0

    (src,) = json.loads(capsys.readouterr().out)
    assert src["children"][0]["name"] == "App.tsx"
    assert src["children"][0]["content"] == "export default 1;"


def test_prompt_failure_exits_with_error(capsys) -> None:
    import requests

    with patch("requests.post", side_effect=requests.exceptions.ConnectionError("refused")):
        code = app.main(["--use-defaults", "--prompt", "anything"])

    assert code == 1
    assert "Backend unavailable" in capsys.readouterr().err


def test_interrupted_session() -> None:
    with patch("workspace_vfs.interface.cli.app.WorkspaceShell.interactive", side_effect=KeyboardInterrupt):
        assert app.main(["--use-defaults"]) == 130


def test_debug_flag_raises_log_level(isolated_env) -> None:
    app.main(["--use-defaults", "--debug", "--tree"])
    cfg = isolated_env.call_args.args[0]
    assert cfg.level == "DEBUG"
    assert cfg.log_file is None


def test_supervisor_entrypoint(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    from workspace_vfs import main as entry

    with patch("workspace_vfs.interface.cli.app.main", return_value=0):
        assert entry.main() == 0

    with patch("workspace_vfs.interface.cli.app.main", side_effect=RuntimeError("boom")):
        assert entry.main() == 1
    assert "CRITICAL ERROR (WORKSPACE-VFS)" in capsys.readouterr().err
