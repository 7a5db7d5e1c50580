"""
download_artifact.integrations.actions - CI Runner Reporting
==============================================================

    - ActionsReporter: step outputs (GITHUB_OUTPUT) and ::error:: failures
"""

from download_artifact.integrations.actions.reporter import (
    ActionsReporter,
    escape_command_data,
    format_output_value,
)

__all__ = [
    "ActionsReporter",
    "escape_command_data",
    "format_output_value",
]
