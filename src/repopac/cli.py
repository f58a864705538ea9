"""
repopac — Package a repository into a single Markdown report for an LLM.

Overview
--------
For every target path the report holds:

- for a directory: its absolute location, whether it is a git repository,
  an indented structure tree, and the contents of every file in fenced code
  blocks (files above 16 KiB are truncated with a notice);
- for a single file: its fenced contents.

The report is printed to stdout in one write once every path has been
processed. Diagnostics (missing paths, unreadable files) go to stderr.

Usage
-----
    repopac                 # report on the current directory
    repopac src main.cpp    # a directory and a single file
    repopac --version
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from repopac import TOOL_NAME, __version__
from repopac.exceptions import InvalidPathError, UnknownOptionError
from repopac.file_manipulation import exists, is_directory, is_regular_file
from repopac.logging import setup_logging
from repopac.output_construction import ReportBuffer, render_directory, render_single_file
from repopac.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repopac.git_info import GitInfoProvider

logger = setup_logging()

USAGE = f"""Usage:
\t{TOOL_NAME} [PATH ...] [OPTIONS]
Description:
\t{TOOL_NAME} packages a repository's structure and file contents into one Markdown report
Options:
\t-h, --help\tShow this help and exit
\t-v, --version\tShow version and exit
Arguments:
\tOne or more directories or files (default: .)
"""

HELP_FLAGS = frozenset({"-h", "--help"})
VERSION_FLAGS = frozenset({"-v", "--version"})


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse the command line from left to right.

    `-h/--help` and `-v/--version` print their text and exit with status 0 as
    soon as they are seen, whatever follows them.

    Args:
        argv (Sequence[str] | None): the arguments, without the program name;
            defaults to `sys.argv[1:]`

    Raises:
        UnknownOptionError: on any other token starting with `-`
        SystemExit: after printing the help or the version

    Returns:
        Settings: the run settings; `paths` defaults to `["."]`
    """
    # Not argparse: options act in order, so `-x --help` fails and `--help -x` exits 0.
    args = sys.argv[1:] if argv is None else list(argv)
    paths: list[str] = []
    for arg in args:
        if arg in HELP_FLAGS:
            sys.stdout.write(USAGE)
            raise SystemExit(0)
        if arg in VERSION_FLAGS:
            sys.stdout.write(f"{TOOL_NAME} {__version__}\n")
            raise SystemExit(0)
        if arg.startswith("-"):
            raise UnknownOptionError(option=arg)
        paths.append(arg)

    if not paths:
        return Settings()
    return Settings(paths=paths)


def dispatch_path(
    out: ReportBuffer,
    path: str,
    settings: Settings,
    *,
    git_info: GitInfoProvider | None = None,
) -> None:
    """Append the report for one target path.

    Raises:
        InvalidPathError: if `path` is empty or does not exist
    """
    if not path:
        raise InvalidPathError(path=path)
    p = Path(path)
    if not exists(p):
        raise InvalidPathError(path=path)
    if is_directory(p):
        render_directory(out, path, git_info=git_info, max_bytes=settings.max_bytes)
    elif is_regular_file(p):
        render_single_file(out, path, max_bytes=settings.max_bytes)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = parse_args(argv)
    except UnknownOptionError as e:
        sys.stderr.write(f"{e}\nUse -h or --help for usage.\n")
        return 1

    out = ReportBuffer()
    for path in settings.paths:
        try:
            dispatch_path(out, path, settings)
        except InvalidPathError as e:
            logger.warning(str(e))

    sys.stdout.flush()
    out.flush_to(sys.stdout.buffer)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
