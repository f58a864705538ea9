from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from repopac.git_info import GitInfoProvider
from repopac.output_construction import (
    ReportBuffer,
    render_directory,
    render_file,
    render_single_file,
)

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


class BranchInfo(GitInfoProvider):
    def describe(self, directory: Path) -> list[str]:
        return [f"branch: main ({directory.name})"]


@pytest.mark.unit
def test_render_file_small_file_is_verbatim(tmp_path: Path) -> None:
    f = tmp_path / "data.json"
    f.write_bytes(b'{"a": 1}')
    out = ReportBuffer()

    render_file(out, f)

    assert out.getvalue() == f'### File: {f}\n```json\n{{"a": 1}}\n```\n\n'.encode()


@pytest.mark.unit
def test_render_file_keeps_exact_bytes(tmp_path: Path) -> None:
    f = tmp_path / "raw.bin"
    payload = b"\x00\xff\xfe binary \r\n"
    f.write_bytes(payload)
    out = ReportBuffer()

    render_file(out, f, display="raw.bin")

    assert out.getvalue() == b"### File: raw.bin\n```\n" + payload + b"\n```\n\n"


@pytest.mark.unit
def test_render_file_truncates_above_cap(tmp_path: Path) -> None:
    f = tmp_path / "big.cpp"
    f.write_bytes(b"a" * 20000)
    out = ReportBuffer()

    render_file(out, f, display="big.cpp")

    assert out.getvalue() == (
        b"### File: big.cpp\n```cpp\n"
        + b"a" * 16384
        + b"\n... (truncated; original 20000 bytes, showing first 16384 bytes)\n```\n\n"
    )


@pytest.mark.unit
def test_render_file_unopenable_keeps_fences(tmp_path: Path, mocker: MockerFixture) -> None:
    f = tmp_path / "locked.js"
    f.write_text("secret", encoding="utf-8")
    mocker.patch.object(Path, "open", side_effect=PermissionError("denied"))
    out = ReportBuffer()

    render_file(out, f, display="locked.js")

    assert out.getvalue() == b"### File: locked.js\n```javascript\n```\n\n"


@pytest.mark.unit
def test_render_directory_sections_in_order(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.cpp").write_text("int main() {}", encoding="utf-8")
    (tmp_path / "README").write_text("hello", encoding="utf-8")
    out = ReportBuffer()

    render_directory(out, tmp_path)
    text = out.getvalue().decode()

    expected_head = (
        "# Repository Context\n\n"
        "## File System Location\n\n"
        f"{tmp_path.absolute().as_posix()}\n\n"
        "Not a git repository\n\n"
        "## Structure\n"
        "```\n"
        "README\n"
        "src/\n"
        "  main.cpp\n"
        "```\n\n"
        "## File Contents\n\n"
    )
    assert text.startswith(expected_head)
    readme_at = text.index(f"### File: {tmp_path / 'README'}\n```\nhello\n```\n\n")
    main_at = text.index(f"### File: {tmp_path / 'src' / 'main.cpp'}\n```cpp\nint main() {{}}\n```\n\n")
    assert readme_at < main_at


@pytest.mark.unit
def test_render_directory_without_files_omits_contents(tmp_path: Path) -> None:
    (tmp_path / "a" / "b").mkdir(parents=True)
    out = ReportBuffer()

    render_directory(out, tmp_path)
    text = out.getvalue().decode()

    assert "## File Contents" not in text
    assert text.endswith("## Structure\n```\na/\n  b/\n```\n\n")


@pytest.mark.unit
def test_render_directory_git_repo(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    out = ReportBuffer()

    render_directory(out, tmp_path)
    text = out.getvalue().decode()

    assert "## Git Info\n\n## Structure\n" in text
    assert "Not a git repository" not in text
    assert "```\n.git/\n```" in text


@pytest.mark.unit
def test_render_directory_uses_git_info_provider(tmp_path: Path) -> None:
    repo = tmp_path / "proj"
    (repo / ".git").mkdir(parents=True)
    out = ReportBuffer()

    render_directory(out, repo, git_info=BranchInfo())

    assert "## Git Info\n\nbranch: main (proj)\n\n## Structure\n" in out.getvalue().decode()


@pytest.mark.unit
def test_render_single_file_uses_path_as_given(tmp_path: Path) -> None:
    f = tmp_path / "one.txt"
    f.write_text("1", encoding="utf-8")
    out = ReportBuffer()

    render_single_file(out, str(f))

    assert out.getvalue() == f"## File Contents\n\n### File: {f}\n```\n1\n```\n\n".encode()


@pytest.mark.unit
def test_report_buffer_flush_writes_once(mocker: MockerFixture) -> None:
    out = ReportBuffer()
    out.write("text ")
    out.write_bytes(b"bytes")
    stream = mocker.MagicMock()

    out.flush_to(stream)

    stream.write.assert_called_once_with(b"text bytes")


def make_undecodable_file(directory: Path) -> Path:
    if sys.platform in {"win32", "darwin"} or sys.getfilesystemencoding().lower() not in {"utf-8", "utf8"}:
        pytest.skip("needs a byte-oriented filesystem with UTF-8 encoding")
    f = directory / os.fsdecode(b"caf\xe9.txt")
    try:
        f.write_bytes(b"latin")
    except (OSError, UnicodeError):
        pytest.skip("filesystem rejects non UTF-8 names")
    return f


@pytest.mark.unit
def test_render_directory_writes_undecodable_names_as_raw_bytes(tmp_path: Path) -> None:
    make_undecodable_file(tmp_path)
    out = ReportBuffer()

    render_directory(out, tmp_path)
    report = out.getvalue()

    assert b"```\ncaf\xe9.txt\n```\n\n" in report
    assert b"### File: " + os.fsencode(tmp_path) + b"/caf\xe9.txt\n```\nlatin\n```\n\n" in report


@pytest.mark.unit
def test_render_directory_keeps_path_prefix_as_given(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("b", encoding="utf-8")
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    out = ReportBuffer()

    render_directory(out, ".")
    text = out.getvalue().decode()

    assert "### File: ./a.txt\n```\na\n```\n\n### File: ./sub/b.txt\n```\nb\n```\n\n" in text
    assert f"## File System Location\n\n{tmp_path.absolute().as_posix()}\n\n" in text
