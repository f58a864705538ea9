from dataclasses import dataclass


@dataclass(frozen=True)
class RepoPacError(Exception):
    """Base exception for errors in the repopac package."""


@dataclass(frozen=True)
class UnknownOptionError(RepoPacError):
    """Raised when the command line holds an option that is not recognized."""

    option: str
    message: str = "Unknown option"

    def __str__(self) -> str:
        return f"{self.message}: {self.option}"


@dataclass(frozen=True)
class InvalidPathError(RepoPacError):
    """Raised when a target path is neither an existing directory nor a file."""

    path: str
    message: str = "is not a valid directory or file"

    def __str__(self) -> str:
        return f"{self.path} {self.message}"
