"""
MirrorFS Shell Module

The interactive command-line shell over a file tree.

Version: 1.0.0
"""

from typing import Callable, Optional

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands
from .editor import TextEditor
from mirrorfs.core.config_loader import get_config
from mirrorfs.filesystem.tree_manager import TreeManager
from mirrorfs.logger import get_logger


class Shell:
    """
    MirrorFS Interactive Shell.

    Provides:
    - Command parsing
    - Built-in file storage commands
    - Scripts (one command per line)

    The prompt shows the current folder of the tree.

    Example:
        >>> shell = Shell(tree)
        >>> shell.execute_line('mkdir docs')
        0
        >>> shell.run()
    """

    def __init__(self, tree: TreeManager, editor: Optional[TextEditor] = None):
        self._tree = tree
        self._editor = editor or TextEditor()
        self._logger = get_logger('shell')
        self._parser = CommandParser()
        self._builtins = BuiltinCommands(self)
        self._running = False
        self._exiting = False

    @property
    def tree(self) -> TreeManager:
        return self._tree

    @property
    def editor(self) -> TextEditor:
        return self._editor

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def exiting(self) -> bool:
        return self._exiting

    def run(self, read_line: Callable[[str], str] = input) -> None:
        """
        Run the interactive shell.

        This is the main REPL loop. It ends on ``exit`` or end of input.
        """
        self._running = True
        self._exiting = False

        config = get_config()

        print(f"\n{config.shell.banner}")
        print("Type 'help' for a list of commands.\n")
        self._builtins.execute('pwd', [])

        while self._running and not self._exiting:
            try:
                try:
                    line = read_line(self.get_prompt())
                except EOFError:
                    print()
                    break
                except KeyboardInterrupt:
                    print("^C")
                    continue

                self.execute_line(line)

            except Exception as e:
                self._logger.exception("Shell error", e)
                print(f"shell: error: {e}")

        self._running = False

    def get_prompt(self) -> str:
        """Generate the shell prompt."""
        config = get_config()
        return f"{self._tree.working_directory().tree_path}{config.shell.prompt_suffix}"

    def execute_line(self, line: str) -> int:
        """
        Execute a command line.

        Args:
            line: Command line string

        Returns:
            Exit code
        """
        cmd = self._parser.parse(line)

        if cmd is None:
            return 0

        return self._execute_command(cmd)

    def _execute_command(self, cmd: ParsedCommand) -> int:
        name = cmd.command.lower()

        if self._builtins.is_builtin(name):
            return self._builtins.execute(name, cmd.args)

        print(f"Error: Unknown command '{cmd.command}'. Type 'help' for available commands.")
        return 127

    def request_exit(self) -> None:
        """Request the shell to exit."""
        self._exiting = True

    def run_script(self, script: str) -> int:
        """
        Run a script (multiple commands).

        Stops early at ``exit``.

        Args:
            script: Script content

        Returns:
            Last exit code
        """
        exit_code = 0

        for line in script.splitlines():
            exit_code = self.execute_line(line)
            if self._exiting:
                break

        return exit_code


def create_shell(tree: TreeManager, editor: Optional[TextEditor] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(tree, editor)
