"""
Command Parser Module

Parses shell command lines into a command name and its arguments.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)


class CommandParser:
    """
    Parses shell command lines.

    Handles:
    - Command and arguments separated by whitespace
    - Single- and double-quoted strings (an empty pair gives an empty argument)
    - Backslash escapes
    - ``#`` comment lines

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse('touch "my notes.txt" hello world')
        >>> cmd.command, cmd.args
        ('touch', ['my notes.txt', 'hello', 'world'])
    """

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string

        Returns:
            ParsedCommand or None if blank or a comment
        """
        line = line.strip()

        if not line or line.startswith('#'):
            return None

        words = self.tokenize(line)
        if not words:
            return None

        return ParsedCommand(command=words[0], args=words[1:])

    @staticmethod
    def tokenize(line: str) -> List[str]:
        """Split a line into words, honoring quotes and escapes."""
        words: List[str] = []
        current = ""
        in_word = False
        in_quote = None
        i = 0

        while i < len(line):
            char = line[i]

            if char in ('"', "'") and in_quote is None:
                in_quote = char
                in_word = True
                i += 1
                continue

            if char == in_quote:
                in_quote = None
                i += 1
                continue

            if char == '\\' and i + 1 < len(line):
                current += line[i + 1]
                in_word = True
                i += 2
                continue

            if in_quote:
                current += char
                i += 1
                continue

            if char.isspace():
                if in_word:
                    words.append(current)
                    current = ""
                    in_word = False
                i += 1
                continue

            current += char
            in_word = True
            i += 1

        if in_word:
            words.append(current)

        return words
