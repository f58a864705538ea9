from __future__ import annotations

from enum import StrEnum, auto
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

MAX_BYTES = 16 * 1024
"""Files above this size are cut to their first ``MAX_BYTES`` bytes."""

TRUNCATION_NOTICE = "... (truncated; original {size} bytes, showing first {shown} bytes)"


class FileType(StrEnum):
    """Categorization of files for choosing the code fence language."""

    JSON = auto()
    JAVASCRIPT = auto()
    CPP = auto()
    OTHER = auto()


EXT2LANG: dict[str, FileType] = {
    ".cpp": FileType.CPP,
    ".hpp": FileType.CPP,
    ".js": FileType.JAVASCRIPT,
    ".json": FileType.JSON,
}

_FENCE_LANGUAGE: dict[FileType, str] = {
    FileType.JSON: "json",
    FileType.JAVASCRIPT: "javascript",
    FileType.CPP: "cpp",
    FileType.OTHER: "",
}


def guess_file_type(path: Path) -> FileType:
    """Guess the file type from the (case-sensitive) extension.

    Args:
        path (Path): The file path to classify.

    Returns:
        FileType: The file type, or FileType.OTHER if the extension is not in the table.
    """
    return EXT2LANG.get(path.suffix, FileType.OTHER)


def guess_language(path: Path) -> str:
    """Get the code fence language tag for a file.

    Args:
        path (Path): The file path to look up.

    Returns:
        str: The fence language ("json", "javascript", "cpp") or "" for a plain fence.
    """
    return _FENCE_LANGUAGE[guess_file_type(path)]


class EntryKind(StrEnum):
    """Kind of a directory entry that takes part in the report."""

    FILE = auto()
    DIRECTORY = auto()


class DirectoryEntry(BaseModel):
    """One child of a listed directory.

    Attributes:
        path: Path of the entry (parent joined with the entry name).
        kind: Whether the entry is a regular file or a directory.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Entry path")
    kind: EntryKind = Field(..., description="File or directory")

    @computed_field
    @property
    def name(self) -> str:
        """Filename of the entry, used as the sort key."""
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


class FileContent(BaseModel):
    """Result of a bounded read of one file.

    Attributes:
        data: The bytes read (the whole file, or its first ``max_bytes`` bytes).
        size: Size of the file on disk in bytes.
        truncated: Whether ``data`` holds only a prefix of the file.
        readable: False when the file could not be opened.
    """

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(default=b"", description="Content read from disk")
    size: int = Field(default=0, ge=0, description="File size in bytes")
    truncated: bool = Field(default=False, description="Whether data is a prefix")
    readable: bool = Field(default=True, description="Whether the file could be opened")
