"""
download_artifact.integrations.actions.reporter - Step Outputs & Failures
===========================================================================

Reports a DownloadResult back to the GitHub Actions runner.

Runner Protocol:
    - Outputs are appended to the file named by GITHUB_OUTPUT, one
      ``name=value`` line each (multi-line values use a heredoc delimiter).
    - A failed step prints ``::error::<message>`` on stdout and exits
      non-zero.

Outputs:
    found-artifact  "true" / "false"
    path            absolute destination path, "" when nothing was found
"""

from __future__ import annotations

import sys
import uuid
from pathlib import Path
from typing import Any, Optional, TextIO

import structlog

from download_artifact.core.exceptions import FilesystemError
from download_artifact.core.models import DownloadResult


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()


def format_output_value(value: Any) -> str:
    """Render an output value the way workflow expressions expect it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def escape_command_data(message: str) -> str:
    """Escape a workflow command payload (%, CR and LF)."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsReporter:
    """Writes step outputs and failure messages for the runner.

    Args:
        output_file: Path of the GITHUB_OUTPUT file. When None, outputs are
            only logged (local runs).
        stream: Stream receiving workflow commands. Defaults to stdout.

    Example:
        >>> reporter = ActionsReporter(output_file=config.output_file)
        >>> exit_code = reporter.report(result)
    """

    def __init__(self, output_file: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
        self._output_file = output_file
        self._stream = stream or sys.stdout
        self._logger = logger.bind(component="actions_reporter")

    def set_output(self, name: str, value: Any) -> None:
        """Publish one named step output.

        Raises:
            FilesystemError: If the output file can't be written.
        """
        text = format_output_value(value)
        self._logger.info("step_output", name=name, value=text)
        if self._output_file is None:
            return

        if "\n" in text or "\r" in text:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            line = f"{name}<<{delimiter}\n{text}\n{delimiter}\n"
        else:
            line = f"{name}={text}\n"

        try:
            with Path(self._output_file).open("a", encoding="utf-8") as fh:
                fh.write(line)
        except OSError as e:
            raise FilesystemError(
                message=f"Unable to write step output '{name}': {e}",
                path=self._output_file,
            ) from e

    def set_failed(self, message: str) -> None:
        """Mark the step as failed with a single error message."""
        self._stream.write(f"::error::{escape_command_data(message)}\n")
        self._stream.flush()

    def report(self, result: DownloadResult) -> int:
        """Report a run's outcome and return the process exit code.

        Successful runs publish both outputs; failed runs publish exactly
        one failure message and no outputs.
        """
        if not result.succeeded:
            self.set_failed(result.error_message or "Download failed")
            return 1

        try:
            for name, value in result.outputs().items():
                self.set_output(name, value)
        except FilesystemError as e:
            self.set_failed(f"Download failed: {e.message}")
            return 1
        return 0
