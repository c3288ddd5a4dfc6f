"""Default implementations of infrastructure abstractions."""

import os
import sys
import uuid
from pathlib import Path
from typing import TextIO

from token_merge.infrastructure.observability import get_infrastructure_logger
from token_merge.infrastructure.ports.system import IFileSystem, IRunContext


class OsFileSystem(IFileSystem):
    """Default implementation using OS file system."""

    def read_text(self, path: Path) -> str:
        """Read file as text."""
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write text to file, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        return path.exists()

    def list_files(self, directory: Path) -> list[Path]:
        """List regular files in a directory, sorted by name."""
        return sorted(p for p in directory.iterdir() if p.is_file())


def _escape_command_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubActionsContext(IRunContext):
    """Run context backed by the GitHub Actions runner protocol.

    Inputs come from ``INPUT_<NAME>`` environment variables, outputs are
    appended to the file named by ``GITHUB_OUTPUT``, warnings and errors
    become workflow-command annotations on stdout.
    """

    def __init__(
        self,
        environ: dict[str, str] | None = None,
        stream: TextIO | None = None,
    ):
        self._environ = os.environ if environ is None else environ
        self._stream = stream or sys.stdout
        self._failed = False
        self.failure_message: str | None = None
        self.log = get_infrastructure_logger("github-actions-context")

    def get_input(self, name: str) -> str:
        key = "INPUT_" + name.replace(" ", "_").upper()
        return self._environ.get(key, "").strip()

    def set_output(self, name: str, value: str) -> None:
        output_file = self._environ.get("GITHUB_OUTPUT")
        if not output_file:
            self.log.warning("github_output_unset", name=name, value=value)
            return

        with open(output_file, "a", encoding="utf-8") as f:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")
        self.log.info("output_set", name=name, value=value)

    def report_failure(self, message: str) -> None:
        self._failed = True
        self.failure_message = message
        self._command("error", None, message)
        self.log.error("run_failed", reason=message)

    def log_info(self, message: str) -> None:
        self.log.info(message)

    def log_warning(self, message: str) -> None:
        self._command("warning", None, message)
        self.log.warning(message)

    def log_error(self, message: str) -> None:
        self._command("error", None, message)
        self.log.error(message)

    @property
    def failed(self) -> bool:
        return self._failed

    def _command(self, command: str, properties: str | None, message: str) -> None:
        prefix = f"::{command} {properties}::" if properties else f"::{command}::"
        self._stream.write(prefix + _escape_command_data(message) + "\n")
        self._stream.flush()
