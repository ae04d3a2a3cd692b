"""
MirrorFS Shell Module

Provides the interactive command interface:
- Command parsing
- Built-in file storage commands
- Line editor and file viewer
"""

from .parser import CommandParser, ParsedCommand
from .editor import TextEditor
from .builtins import BuiltinCommands
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'TextEditor',
    'BuiltinCommands',
    'Shell',
    'create_shell',
]
