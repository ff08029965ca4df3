from __future__ import annotations

"""
Line-Oriented Workspace Shell.

Drives a WorkspaceController from text commands, either typed
interactively or read from a script. Each command maps onto one
controller or store operation; store errors are reported and the
session continues.
"""

import logging
import shlex
import sys
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Tuple

from workspace_vfs.core.export.download import DownloadAdapter
from workspace_vfs.core.tree.renderer import render_forest
from workspace_vfs.core.workspace.controller import WorkspaceController
from workspace_vfs.domain.errors import VfsError
from workspace_vfs.infra.logging import get_recent_logs

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  tree | ls                 show the workspace tree with ids (* = active)
  mkdir NAME [PARENT_ID]    create a folder
  touch NAME [PARENT_ID]    create an empty file and select it
  select ID                 select a file (folders toggle expansion)
  cat [ID]                  print a file (defaults to the active file)
  edit TEXT                 replace the active file's content
  write ID TEXT             replace a file's content
  rm ID                     delete a node and its subtree
  gen PROMPT                ask the assistant and store the result
  history                   show the assistant transcript
  logs [N]                  show the last N lines of the log file
  export                    save the whole workspace as project.json
  download ID               save one file
  help                      show this text
  quit | exit               leave the shell

Quote TEXT and use \\n inside it for line breaks."""


class ShellUsageError(Exception):
    """A command was called with the wrong arguments."""


class WorkspaceShell:
    """
    Command interpreter on top of the workspace controller.

    Attributes:
        controller: Event router receiving every command.
        adapter: Host save-to-disk bridge for export commands.
        out: Stream receiving command output.
    """

    def __init__(
            self,
            controller: WorkspaceController,
            adapter: DownloadAdapter,
            out: Optional[TextIO] = None,
    ) -> None:
        self.controller = controller
        self.adapter = adapter
        self.out = out or sys.stdout
        self.failures = 0
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "tree": self._cmd_tree,
            "ls": self._cmd_tree,
            "mkdir": self._cmd_mkdir,
            "touch": self._cmd_touch,
            "select": self._cmd_select,
            "cat": self._cmd_cat,
            "edit": self._cmd_edit,
            "write": self._cmd_write,
            "rm": self._cmd_rm,
            "gen": self._cmd_gen,
            "history": self._cmd_history,
            "logs": self._cmd_logs,
            "export": self._cmd_export,
            "download": self._cmd_download,
            "help": self._cmd_help,
        }

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def execute(self, line: str) -> bool:
        """
        Run a single command line.

        Args:
            line: Raw command text.

        Returns:
            bool: False when the session should end, True otherwise.
        """
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            self._fail(f"Cannot parse command: {e}")
            return True

        if not tokens:
            return True

        name, argv = tokens[0].lower(), tokens[1:]
        if name in ("quit", "exit"):
            return False

        handler = self._commands.get(name)
        if handler is None:
            self._fail(f"Unknown command '{name}'. Type 'help'.")
            return True

        try:
            handler(argv)
        except ShellUsageError as e:
            self._fail(f"Usage: {e}")
        except (VfsError, ValueError) as e:
            logger.warning(f"Command '{name}' rejected: {e}")
            self._fail(str(e))
        return True

    def run(self, lines: Iterable[str], prompt: str = "") -> int:
        """
        Execute commands until input is exhausted or 'quit' is read.

        Returns:
            int: Number of failed commands.
        """
        for line in lines:
            if prompt:
                self._print(f"{prompt}{line.rstrip()}")
            if not self.execute(line):
                break
        return self.failures

    def interactive(self, prompt: str = "vfs> ") -> int:
        """Read commands from stdin until EOF or 'quit'."""
        self._print("Type 'help' for the list of commands.")
        while True:
            try:
                line = input(prompt)
            except EOFError:
                self._print("")
                break
            if not self.execute(line):
                break
        return self.failures

    # -------------------------------------------------------------------------
    # COMMANDS
    # -------------------------------------------------------------------------

    def _cmd_tree(self, argv: List[str]) -> None:
        store = self.controller.store
        lines = render_forest(store.forest, active_id=store.active_id, show_ids=True)
        self._print("\n".join(lines) if lines else "(empty workspace)")

    def _cmd_mkdir(self, argv: List[str]) -> None:
        name, parent = _name_and_parent(argv, "mkdir NAME [PARENT_ID]")
        folder_id = self.controller.create_folder(name, parent)
        self._print(f"Created folder {name} [{folder_id}]")

    def _cmd_touch(self, argv: List[str]) -> None:
        name, parent = _name_and_parent(argv, "touch NAME [PARENT_ID]")
        file_id = self.controller.create_file(name, parent)
        language = self.controller.store.get_file(file_id).language
        self._print(f"Created file {name} [{file_id}] ({language})")

    def _cmd_select(self, argv: List[str]) -> None:
        if len(argv) != 1:
            raise ShellUsageError("select ID")
        self.controller.select(argv[0])
        current = self.controller.current_file()
        if current is not None and current.id == argv[0]:
            self._print(f"Active: {self.controller.store.path_of(current.id)} ({current.language})")

    def _cmd_cat(self, argv: List[str]) -> None:
        if len(argv) > 1:
            raise ShellUsageError("cat [ID]")
        if argv:
            node = self.controller.store.get_file(argv[0])
        else:
            node = self.controller.current_file()
            if node is None:
                raise ShellUsageError("cat ID (no active file)")
        self._print(node.content)

    def _cmd_edit(self, argv: List[str]) -> None:
        if self.controller.current_file() is None:
            raise ShellUsageError("edit TEXT (select a file first)")
        self.controller.change_content(_unescape(" ".join(argv)))

    def _cmd_write(self, argv: List[str]) -> None:
        if not argv:
            raise ShellUsageError("write ID TEXT")
        self.controller.store.update_content(argv[0], _unescape(" ".join(argv[1:])))

    def _cmd_rm(self, argv: List[str]) -> None:
        if len(argv) != 1:
            raise ShellUsageError("rm ID")
        self.controller.delete(argv[0])
        self._print(f"Deleted {argv[0]}")

    def _cmd_gen(self, argv: List[str]) -> None:
        if not argv:
            raise ShellUsageError("gen PROMPT")
        result = self.controller.request_generation(" ".join(argv))
        if not result.ok:
            self._fail(f"Generation failed: {result.error}")
            return
        path = self.controller.store.path_of(result.target_id) if result.target_id else ""
        action = "Created" if result.created else "Updated"
        self._print(f"{action} {path} with {len(result.text)} generated chars")

    def _cmd_history(self, argv: List[str]) -> None:
        for message in self.controller.messages:
            stamp = message.timestamp.strftime("%H:%M:%S")
            self._print(f"[{stamp}] {message.role}: {message.content}")

    def _cmd_logs(self, argv: List[str]) -> None:
        if len(argv) > 1 or (argv and not argv[0].isdigit()):
            raise ShellUsageError("logs [N]")
        n_lines = int(argv[0]) if argv else 20
        self._print(get_recent_logs(n_lines).rstrip("\n"))

    def _cmd_export(self, argv: List[str]) -> None:
        ok, info = self.adapter.download_project(self.controller.store)
        if ok:
            self._print(f"Saved {info}")
        else:
            self._fail(f"Export failed: {info}")

    def _cmd_download(self, argv: List[str]) -> None:
        if len(argv) != 1:
            raise ShellUsageError("download ID")
        ok, info = self.adapter.download_file(self.controller.store, argv[0])
        if ok:
            self._print(f"Saved {info}")
        else:
            self._fail(f"Download failed: {info}")

    def _cmd_help(self, argv: List[str]) -> None:
        self._print(HELP_TEXT)

    # -------------------------------------------------------------------------
    # HELPERS
    # -------------------------------------------------------------------------

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def _fail(self, message: str) -> None:
        self.failures += 1
        self._print(f"ERROR: {message}")


def _name_and_parent(argv: List[str], usage: str) -> Tuple[str, Optional[str]]:
    if not 1 <= len(argv) <= 2:
        raise ShellUsageError(usage)
    return argv[0], (argv[1] if len(argv) == 2 else None)


def _unescape(text: str) -> str:
    return text.replace("\\n", "\n").replace("\\t", "\t")
