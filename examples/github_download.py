"""
GitHub Example - Download the Latest Artifact of a Repository
===============================================================

Downloads the most recently updated artifact of a repository through the
GitHub REST API and prints the step outputs a workflow would receive.

Requires a token with read access to Actions:

    export INPUT_GITHUB_TOKEN=ghp_...

Usage:
    python examples/github_download.py owner/repo [destination]
"""

from __future__ import annotations

import asyncio
import sys

from download_artifact.core.config import load_config
from download_artifact.core.logging_config import configure_logging
from download_artifact.facade import run_download


async def main(repo: str, destination: str) -> int:
    """Download the latest artifact of repo and print the outputs."""
    config = load_config(repo=repo, path=destination, latest=True)
    configure_logging(config.log_level)

    result = await run_download(config)
    if not result.succeeded:
        print(result.error_message)
        return 1

    for name, value in result.outputs().items():
        print(f"{name}: {value}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else "./artifacts")))
