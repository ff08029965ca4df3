from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge
(defaults, persisted state, CLI overrides), workspace construction, and
dispatch to the one-shot actions or the interactive shell.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from workspace_vfs.core.export.download import DownloadAdapter
from workspace_vfs.core.tree.renderer import render_forest
from workspace_vfs.core.tree.store import TreeStore
from workspace_vfs.core.validator import validate_config
from workspace_vfs.core.workspace.controller import WorkspaceController
from workspace_vfs.domain.config import get_default_config, load_app_state, load_config, save_config
from workspace_vfs.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from workspace_vfs.infra.network import AssistantClient
from workspace_vfs.interface.cli import args as cli_args
from workspace_vfs.interface.cli.shell import WorkspaceShell

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid input, 130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    settings = {} if args.use_defaults else load_app_state().get("app_settings", {})
    log_level = "DEBUG" if args.debug else settings.get("log_level", "INFO")
    log_file = get_default_log_path() if settings.get("log_to_file") else None
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config(clean_conf)

    # 4. Workspace assembly
    store = TreeStore.with_seed_project() if clean_conf["seed_project"] else TreeStore()
    controller = WorkspaceController(
        store,
        assistant=AssistantClient.from_config(clean_conf),
        generated_file_name=clean_conf["generated_file_name"],
    )
    adapter = DownloadAdapter(clean_conf["export_dir"])
    shell = WorkspaceShell(controller, adapter)

    # 5. Execution phase
    try:
        exit_code = _run(args, controller, shell)
    except KeyboardInterrupt:
        logger.warning("Session interrupted by user.")
        return 130

    # 6. Output rendering phase
    if args.tree:
        lines = render_forest(store.forest, active_id=store.active_id)
        print("\n".join(lines))
    if args.json_output:
        print(store.export_all().decode("utf-8"))

    return exit_code


def _run(args: Any, controller: WorkspaceController, shell: WorkspaceShell) -> int:
    """Dispatch to the one-shot prompt, a script, or the interactive shell."""
    if args.prompt is not None:
        result = controller.request_generation(args.prompt)
        if not result.ok:
            print(f"ERROR: {result.error}", file=sys.stderr)
            return 1
        if args.script_path is None:
            return 0

    if args.script_path is not None:
        try:
            with open(args.script_path, "r", encoding="utf-8") as f:
                script = f.read().splitlines()
        except OSError as e:
            logger.error(f"Cannot read script '{args.script_path}': {e}")
            print(f"ERROR: Cannot read script: {e}", file=sys.stderr)
            return 2
        failures = shell.run(script)
        return 1 if failures else 0

    if args.tree or args.json_output:
        return 0

    shell.interactive()
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged and None values are ignored.
    """
    out = dict(base)
    keys_to_merge = [
        "export_dir", "assistant_endpoint", "assistant_model",
        "temperature", "max_tokens", "seed_project",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


if __name__ == "__main__":
    sys.exit(main())
