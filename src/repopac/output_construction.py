from __future__ import annotations

import io
import os
from pathlib import Path
from typing import TYPE_CHECKING

from repopac.config import MAX_BYTES, TRUNCATION_NOTICE, guess_language
from repopac.file_manipulation import collect_files, is_git_repo, print_structure, read_file_head
from repopac.git_info import GitInfoProvider, NullGitInfo

if TYPE_CHECKING:
    from typing import BinaryIO


class ReportBuffer:
    """Append-only accumulator for the report of one run.

    Headings and fences are written as UTF-8 text while file contents are
    appended as raw bytes, so a rendered file is byte-for-byte identical to
    the one on disk. Undecodable filename bytes (surrogate escapes from
    `os.scandir`) are written back as the original bytes.
    """

    def __init__(self) -> None:
        self._buf = io.BytesIO()

    def write(self, text: str) -> None:
        self._buf.write(text.encode("utf-8", errors="surrogateescape"))

    def write_bytes(self, data: bytes) -> None:
        self._buf.write(data)

    def getvalue(self) -> bytes:
        return self._buf.getvalue()

    def flush_to(self, stream: BinaryIO) -> None:
        """Write the whole report to `stream` in a single call."""
        stream.write(self.getvalue())
        stream.flush()


def render_file(
    out: ReportBuffer,
    path: Path,
    *,
    display: str | None = None,
    max_bytes: int = MAX_BYTES,
) -> None:
    """Append one fenced code block for `path` to the report.

    The fence language comes from the file extension. Files larger than
    `max_bytes` are cut to their first `max_bytes` bytes and followed by a
    truncation notice. A file that cannot be opened still gets its heading
    and an empty block.

    Args:
        out (ReportBuffer): the report to append to
        path (Path): the file to render
        display (str | None): the path shown in the heading; defaults to `path`
        max_bytes (int): the per-file byte cap
    """
    out.write(f"### File: {display if display is not None else path}\n")
    out.write(f"```{guess_language(path)}\n")

    content = read_file_head(path, max_bytes=max_bytes)
    if content.readable:
        out.write_bytes(content.data)
        if content.truncated:
            notice = TRUNCATION_NOTICE.format(size=content.size, shown=max_bytes)
            out.write(f"\n{notice}\n")
        else:
            out.write("\n")

    out.write("```\n\n")


def render_directory(
    out: ReportBuffer,
    path: str | Path,
    *,
    git_info: GitInfoProvider | None = None,
    max_bytes: int = MAX_BYTES,
) -> None:
    """Append the full repository report for the directory `path`.

    The report holds, in order: the location, the git status, the structure
    tree, and the contents of every collected file. The `## File Contents`
    section is left out when the tree holds no regular file. File headings
    keep `path` as given, so `.` yields `./a.txt`.

    Args:
        out (ReportBuffer): the report to append to
        path (str | Path): the directory to report on
        git_info (GitInfoProvider | None): provider for the `## Git Info` section
        max_bytes (int): the per-file byte cap
    """
    provider = git_info or NullGitInfo()
    root = Path(path)
    prefix = os.fspath(path)

    out.write("# Repository Context\n\n")

    out.write("## File System Location\n\n")
    out.write(f"{root.absolute().as_posix()}\n\n")

    if is_git_repo(root):
        out.write("## Git Info\n\n")
        lines = provider.describe(root)
        if lines:
            out.write("\n".join(lines) + "\n\n")
    else:
        out.write("Not a git repository\n\n")

    out.write("## Structure\n")
    out.write("```\n")
    for line in print_structure(root):
        out.write(f"{line}\n")
    out.write("```\n\n")

    files = collect_files(root)
    if files:
        out.write("## File Contents\n\n")
        for f in files:
            display = os.path.join(prefix, os.fspath(f.relative_to(root)))
            render_file(out, f, display=display, max_bytes=max_bytes)


def render_single_file(out: ReportBuffer, path: str, *, max_bytes: int = MAX_BYTES) -> None:
    """Append the report for a single file given on the command line."""
    out.write("## File Contents\n\n")
    render_file(out, Path(path), display=path, max_bytes=max_bytes)
