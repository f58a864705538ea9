from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class GitInfoProvider(ABC):
    """Source of the lines shown under the `## Git Info` heading.

    Only called for directories that hold a `.git/` directory. A concrete
    provider may report branch, commit or remotes; the report layout does not
    depend on what it returns.
    """

    @abstractmethod
    def describe(self, directory: Path) -> list[str]:
        """Return the Markdown lines describing the repository at `directory`."""
        raise NotImplementedError


class NullGitInfo(GitInfoProvider):
    """Default provider: git metadata is not reported."""

    def describe(self, directory: Path) -> list[str]:  # noqa: ARG002
        return []
