#!/usr/bin/env python3
"""
MirrorFS - A file storage shell mirrored onto a real directory

This is the main entry point for MirrorFS.

Every folder and file created in the shell is created under the storage
base directory as well, and whatever already lives there is loaded at
startup.

Version: 1.0.0
"""

import argparse
import sys
from typing import Optional, List

from mirrorfs.core.bootloader import Bootloader
from mirrorfs.shell.shell import Shell


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mirrorfs',
        description="File storage shell mirrored onto a real directory."
    )
    parser.add_argument(
        '--config',
        default='config.json',
        help="JSON configuration file (defaults apply when it does not exist)"
    )
    parser.add_argument(
        '--base-dir',
        default=None,
        help="Directory holding the storage root (overrides storage.base_dir)"
    )
    parser.add_argument(
        '--script',
        default=None,
        help="Run the commands in this file instead of the interactive shell"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for MirrorFS.

    Boot sequence:
    1. Load configuration
    2. Initialize logging
    3. Prepare storage
    4. Load the tree from disk
    5. Start shell (or run a script)
    6. Shutdown
    """
    args = build_parser().parse_args(argv)

    bootloader = Bootloader(args.config, base_dir=args.base_dir)
    result = bootloader.boot()

    if not result.success:
        print(f"Boot failed at stage {result.failed_stage.name}")
        print(f"Error: {result.message}")
        return 1

    shell = Shell(bootloader.get_tree())

    if args.script:
        with open(args.script, 'r', encoding='utf-8') as f:
            script = f.read()
        try:
            return shell.run_script(script)
        finally:
            bootloader.shutdown()

    try:
        shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
    finally:
        bootloader.shutdown()

    return 0


if __name__ == '__main__':
    sys.exit(main())
