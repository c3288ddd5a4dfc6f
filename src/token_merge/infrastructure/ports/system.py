"""System infrastructure port definitions."""

from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """Abstract interface for file system operations."""

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Read file as text."""
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Write text to file."""
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...

    @abstractmethod
    def list_files(self, directory: Path) -> list[Path]:
        """List regular files directly inside a directory, sorted by name."""
        ...


class IRunContext(ABC):
    """Abstract interface for the CI run the tool executes in.

    Core logic depends only on this collaborator: inputs, outputs, log
    annotations and the failure flag.
    """

    @abstractmethod
    def get_input(self, name: str) -> str:
        """Return an input value, empty string when not supplied."""
        ...

    @abstractmethod
    def set_output(self, name: str, value: str) -> None:
        """Publish a named result value to the calling pipeline."""
        ...

    @abstractmethod
    def report_failure(self, message: str) -> None:
        """Mark the run as failed."""
        ...

    @abstractmethod
    def log_info(self, message: str) -> None:
        ...

    @abstractmethod
    def log_warning(self, message: str) -> None:
        ...

    @abstractmethod
    def log_error(self, message: str) -> None:
        ...

    @property
    @abstractmethod
    def failed(self) -> bool:
        """Whether report_failure has been called."""
        ...
