"""
Shell Built-in Commands

Implements the file storage commands of the shell.

Version: 1.0.0
"""

import time
from typing import Callable, List, Optional

from mirrorfs.filesystem.folder import ListingEntry


HELP_TEXT = """
--- Available Commands ---
  mkdir <folder_path>                 - Create a new folder.
  touch <file_path> [content]         - Create a new file with optional content.
  rm <path>                           - Delete a file or folder.
  mv <source_path> <destination_path> - Move a file or folder.
  cp <source_path> <destination_path> - Copy a file or folder.
  rename <path> <new_name>            - Rename a file or folder.
  cd [path]                           - Change directory. Use '..' for parent, '.' for current.
  ls [-l] [path]                      - List contents of a folder. Use '-l' for detailed view.
  cat <file_path>                     - View content of a file.
  nano <file_path>                    - Edit content of a file (interactive editor).
  search <term>                       - Search file names and contents.
  history                             - View file access history.
  pwd                                 - Print working directory.
  help                                - Display this help message.
  exit                                - Exit the file system.
"""

TIME_FORMAT = "%Y-%m-%d %H:%M"


def format_time(timestamp: Optional[float]) -> str:
    if timestamp is None:
        return "-"
    return time.strftime(TIME_FORMAT, time.localtime(timestamp))


def format_entry(entry: ListingEntry, detailed: bool = False) -> str:
    """Render one listing row."""
    if not detailed:
        return f"  {entry.display_name}"
    return (
        f"  {entry.tag} {entry.name:<20} Size: {entry.size:<8} "
        f"Created: {format_time(entry.created)} "
        f"Modified: {format_time(entry.modified)} "
        f"Accessed: {format_time(entry.accessed)}"
    )


class BuiltinCommands:
    """
    Built-in shell commands.

    Each command takes its argument list and returns an exit code.
    Errors raised by the tree are printed by :meth:`execute`; the
    session carries on.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._commands: dict[str, Callable] = {
            'help': self.cmd_help,
            'pwd': self.cmd_pwd,
            'mkdir': self.cmd_mkdir,
            'touch': self.cmd_touch,
            'rm': self.cmd_rm,
            'rename': self.cmd_rename,
            'mv': self.cmd_mv,
            'cp': self.cmd_cp,
            'cd': self.cmd_cd,
            'ls': self.cmd_ls,
            'cat': self.cmd_cat,
            'nano': self.cmd_nano,
            'search': self.cmd_search,
            'history': self.cmd_history,
            'exit': self.cmd_exit,
        }

    @property
    def tree(self):
        return self._shell.tree

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str]) -> int:
        """
        Execute a built-in command.

        Args:
            name: Command name
            args: Command arguments

        Returns:
            Exit code
        """
        cmd = self._commands.get(name)
        if cmd:
            try:
                return cmd(args)
            except Exception as e:
                print(f"{name}: {e}")
                return 1
        return 127  # Command not found

    # Command implementations

    def cmd_help(self, args: List[str]) -> int:
        """Display help information."""
        print(HELP_TEXT)
        return 0

    def cmd_pwd(self, args: List[str]) -> int:
        """Print working directory."""
        print(f"Current directory: {self.tree.working_directory().tree_path}")
        return 0

    def cmd_mkdir(self, args: List[str]) -> int:
        """Create folders."""
        if not args:
            print("Usage: mkdir <folder_path>")
            return 1

        for path in args:
            folder = self.tree.create_folder(path)
            print(f"Folder '{folder.name}' created in '{folder.parent.tree_path}'.")
        return 0

    def cmd_touch(self, args: List[str]) -> int:
        """Create a file; remaining arguments become its content."""
        if not args:
            print("Usage: touch <file_path> [content]")
            return 1

        content = ' '.join(args[1:])
        file = self.tree.create_file(args[0], content)
        print(f"File '{file.name}' created in '{file.parent.tree_path}'.")
        return 0

    def cmd_rm(self, args: List[str]) -> int:
        """Remove files or folders."""
        if not args:
            print("Usage: rm <path>")
            return 1

        for path in args:
            name = self.tree.get(path).name
            self.tree.delete(path)
            print(f"'{name}' deleted.")
        return 0

    def cmd_rename(self, args: List[str]) -> int:
        if len(args) != 2:
            print("Usage: rename <path> <new_name>")
            return 1

        old_name = self.tree.get(args[0]).name
        entity = self.tree.rename(args[0], args[1])
        print(f"'{old_name}' renamed to '{entity.name}'.")
        return 0

    def cmd_mv(self, args: List[str]) -> int:
        if len(args) != 2:
            print("Usage: mv <source_path> <destination_path>")
            return 1

        origin = self.tree.get(args[0]).parent
        entity = self.tree.move(args[0], args[1])
        origin_path = origin.tree_path if origin is not None else '/'
        print(f"Moved '{entity.name}' from '{origin_path}' to '{entity.parent.tree_path}'.")
        return 0

    def cmd_cp(self, args: List[str]) -> int:
        if len(args) != 2:
            print("Usage: cp <source_path> <destination_path>")
            return 1

        result = self.tree.copy(args[0], args[1])
        for skipped in result.skipped:
            print(f"Skipped '{skipped.path}': {skipped.reason}")
        print(f"Copied '{result.entity.name}' to '{result.entity.parent.tree_path}'.")
        return 0 if result.complete else 1

    def cmd_cd(self, args: List[str]) -> int:
        """Change directory."""
        path = args[0] if args else '/'
        folder = self.tree.navigate(path)
        print(f"Changed directory to '{folder.tree_path}'.")
        return 0

    def cmd_ls(self, args: List[str]) -> int:
        """List folder contents."""
        detailed = False
        if args and args[0] == '-l':
            detailed = True
            args = args[1:]
        path = args[0] if args else '.'

        folder = self.tree.get(path)
        entries = self.tree.list(path, detailed=detailed)

        print(f"Contents of {folder.tree_path}:")
        if not entries:
            print("  (Empty)")
        for entry in entries:
            print(format_entry(entry, detailed))
        return 0

    def cmd_cat(self, args: List[str]) -> int:
        """Display file contents."""
        if not args:
            print("Usage: cat <file_path>")
            return 1

        file = self.tree.read_file(args[0])
        self._shell.editor.view_text(file.content, title=file.name)
        return 0

    def cmd_nano(self, args: List[str]) -> int:
        """Edit a file interactively."""
        if not args:
            print("Usage: nano <file_path>")
            return 1

        self.tree.edit_file(args[0], self._shell.editor.edit_text)
        return 0

    def cmd_search(self, args: List[str]) -> int:
        """Search names and file contents."""
        if not args:
            print("Usage: search <term>")
            return 1

        term = ' '.join(args)
        hits = self.tree.search(term)

        print(f"--- Search Results for '{term}' ---")
        if not hits:
            print("No files or folders found matching the search term.")
        for hit in hits:
            print(f"  {hit.tag}: {hit.path}")
        print("------------------------------------------")
        return 0

    def cmd_history(self, args: List[str]) -> int:
        """Display file access history."""
        history = self.tree.history
        if history is None:
            print("history: access history is disabled")
            return 1

        entries = history.get_history()
        print("--- File Access History ---")
        if not entries:
            print("  (No access history found)")
        for entry in entries:
            print(f"  {entry}")
        print("--------------------------")
        return 0

    def cmd_exit(self, args: List[str]) -> int:
        """Exit the shell."""
        print("File System shut down.")
        self._shell.request_exit()
        return 0
