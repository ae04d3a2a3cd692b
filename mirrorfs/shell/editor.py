"""
Text Editor Module

Line-oriented interactive editor used by ``nano``, and the numbered
viewer used by ``cat``.

Version: 1.0.0
"""

from typing import Callable, Optional, List

from mirrorfs.core.config_loader import EditorConfig, get_config
from mirrorfs.filesystem.file import LINE_TERMINATOR


class TextEditor:
    """
    Interactive line editor.

    Every line typed is appended to the buffer, except for the editor
    commands (matched ignoring case)::

        _save_                      keep the buffer and leave
        _quit_                      discard the buffer and leave
        _insert_ <n> <text>         insert <text> as line n (1..count+1)
        _delete_ <n>                delete line n (1..count)

    End of input behaves like ``_quit_``.

    Args:
        config: Command words; defaults to the loaded configuration
        read_line: Called with a prompt, returns one line of input
        output: Called with each line of output
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        read_line: Callable[[str], str] = input,
        output: Callable[[str], None] = print
    ):
        self._config = config or get_config().editor
        self._read_line = read_line
        self._output = output

    @property
    def config(self) -> EditorConfig:
        return self._config

    def banner(self) -> str:
        c = self._config
        return (
            f"--- Text Editor (Type '{c.save_command}' on a new line to save and exit, "
            f"'{c.quit_command}' to exit without saving, "
            f"'{c.insert_command} <line_number> <text>' to insert a line, "
            f"'{c.delete_command} <line_number>' to delete a line) ---"
        )

    def show_lines(self, lines: List[str]) -> None:
        for number, line in enumerate(lines, start=1):
            self._output(f"{number}: {line}")

    def view_text(self, content: str, title: Optional[str] = None) -> None:
        """Print ``content`` with line numbers inside a header and footer."""
        header = f"--- Content of {title} ---" if title else "--- Viewing File Content ---"
        self._output(header)
        self.show_lines(content.split(LINE_TERMINATOR))
        self._output("-" * len(header))

    def edit_text(self, initial: str) -> str:
        """
        Edit ``initial`` interactively.

        Returns:
            The edited text on save, ``initial`` unchanged on quit
        """
        c = self._config
        lines = initial.split(LINE_TERMINATOR) if initial else []

        self._output(self.banner())
        self._output("Initial Content:")
        self.show_lines(lines)

        while True:
            try:
                line = self._read_line(f"{len(lines) + 1}> ")
            except EOFError:
                self._output("Discard changes")
                return initial

            command = line.strip().casefold()

            if command == c.save_command.casefold():
                self._output("Changes saved")
                return LINE_TERMINATOR.join(lines)

            if command == c.quit_command.casefold():
                self._output("Discard changes")
                return initial

            words = line.split(' ', 2)
            keyword = words[0].casefold()

            if keyword == c.insert_command.casefold() and len(words) > 1:
                self._insert(lines, words)
            elif keyword == c.delete_command.casefold() and len(words) > 1:
                self._delete(lines, words)
            else:
                lines.append(line)

            self.show_lines(lines)

    def _insert(self, lines: List[str], words: List[str]) -> None:
        if len(words) != 3 or not words[1].lstrip('-').isdigit():
            self._output(f"Invalid insert command. Usage: {self._config.insert_command} <line_number> <text>")
            return

        number = int(words[1])
        if number < 1 or number > len(lines) + 1:
            self._output(f"Invalid line number for insert: {number}")
            return

        lines.insert(number - 1, words[2])
        self._output(f"Line inserted at {number}.")

    def _delete(self, lines: List[str], words: List[str]) -> None:
        if len(words) != 2 or not words[1].strip().lstrip('-').isdigit():
            self._output(f"Invalid delete command. Usage: {self._config.delete_command} <line_number>")
            return

        number = int(words[1])
        if number < 1 or number > len(lines):
            self._output(f"Invalid line number for delete: {number}")
            return

        del lines[number - 1]
        self._output(f"Line {number} deleted.")
