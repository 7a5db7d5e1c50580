"""
download_artifact.__main__ - Command-Line Entry Point
=======================================================

Runs one download as a workflow step:

    python -m download_artifact [--config download-artifact.yaml]

Inputs come from the INPUT_* environment variables set by the runner (see
core/config.py); the exit code is 0 on success and 1 on failure.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

from download_artifact.core.config import load_config
from download_artifact.core.exceptions import ConfigurationError
from download_artifact.core.logging_config import configure_logging
from download_artifact.facade import run_download
from download_artifact.integrations.actions.reporter import ActionsReporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="download-artifact",
        description="Download and extract the latest CI artifacts of a repository.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML configuration file (default: download-artifact.yaml if present)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        configure_logging()
        ActionsReporter().set_failed(f"Download failed: {e.message}")
        return 1

    configure_logging(config.log_level)
    result = asyncio.run(run_download(config))
    return ActionsReporter(output_file=config.output_file).report(result)


if __name__ == "__main__":
    sys.exit(main())
