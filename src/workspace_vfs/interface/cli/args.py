from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the workspace CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="workspace-vfs",
        description="In-memory editing workspace with an assistant-backed code generator.",
    )

    # --- Workspace bootstrap ---
    p.add_argument(
        "--empty",
        action="store_true",
        help="Start with an empty workspace instead of the starter project.",
    )
    p.add_argument(
        "--script",
        dest="script_path",
        default=None,
        help="Run shell commands from a file instead of reading stdin interactively.",
    )
    p.add_argument(
        "--prompt",
        default=None,
        help="Send a single prompt to the assistant and store the result.",
    )

    # --- Output ---
    p.add_argument(
        "--tree",
        action="store_true",
        help="Print the workspace tree before exiting.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the full workspace export as JSON before exiting.",
    )
    p.add_argument(
        "--export-dir",
        dest="export_dir",
        default=None,
        help="Directory where exported artifacts are saved.",
    )

    # --- Assistant ---
    p.add_argument(
        "--endpoint",
        dest="assistant_endpoint",
        default=None,
        help="Completion endpoint URL.",
    )
    p.add_argument(
        "--model",
        dest="assistant_model",
        default=None,
        help="Model identifier sent to the endpoint.",
    )
    p.add_argument(
        "--temperature",
        type=float,
        default=None,
        help="Sampling temperature.",
    )
    p.add_argument(
        "--max-tokens",
        dest="max_tokens",
        type=int,
        default=None,
        help="Generation budget in tokens.",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration for later sessions.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset (None means 'keep').
    """
    overrides: Dict[str, Any] = {
        "export_dir": args.export_dir,
        "assistant_endpoint": args.assistant_endpoint,
        "assistant_model": args.assistant_model,
        "temperature": args.temperature,
        "max_tokens": args.max_tokens,
    }

    if args.empty:
        overrides["seed_project"] = False

    return overrides
