"""
download_artifact.core.config - Configuration Management
==========================================================

Configuration for one downloader invocation. It is read once at the entry
point and passed explicitly to every stage; no stage reads the environment
on its own.

Sources (highest priority first):

    1. Explicit constructor arguments / load_config() overrides
    2. YAML configuration file (download-artifact.yaml)
    3. Environment variables (GitHub Actions inputs, INPUT_ prefix)
    4. Default values defined below

GitHub Actions exposes every `with:` input of a step as an environment
variable named INPUT_<NAME> (upper-cased), so the field names below match
the action's input names:

    INPUT_GITHUB_TOKEN=ghp_...      → config.github_token
    INPUT_REPO=octocat/hello-world  → config.repo
    INPUT_PATH=artifacts            → config.path
    INPUT_NAME=build-x              → config.name
    INPUT_LATEST=true               → config.latest

Runner-provided variables are read without the prefix:

    GITHUB_API_URL → config.api_base_url
    GITHUB_OUTPUT  → config.output_file

Both can also be set as inputs (INPUT_API_BASE_URL, INPUT_OUTPUT_FILE); no
other unprefixed names are read.

Usage:
    # From the environment (inside a workflow step):
    config = DownloaderConfig()

    # Explicit values (tests, scripts):
    config = DownloaderConfig(github_token="t", repo="octocat/hello-world")

    # YAML file plus overrides:
    config = load_config("download-artifact.yaml", latest=True)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from download_artifact.core.exceptions import ConfigurationError


DEFAULT_CONFIG_FILE = "download-artifact.yaml"


# =============================================================================
# Repository Identity
# =============================================================================
class RepositoryIdentity(BaseModel):
    """The owner/repo pair whose artifacts are listed.

    Attributes:
        owner: Account or organization owning the repository.
        repo: Repository name.

    Example:
        >>> RepositoryIdentity.parse("octocat/hello-world").owner
        'octocat'
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1, description="Repository owner")
    repo: str = Field(min_length=1, description="Repository name")

    @classmethod
    def parse(cls, value: str) -> RepositoryIdentity:
        """Split an "owner/repo" string on its first slash.

        Raises:
            ConfigurationError: If either part is empty.
        """
        owner, _, repo = (value or "").partition("/")
        if not owner or not repo:
            raise ConfigurationError(
                message=f'Invalid repo format: "{value}". Expected "owner/repo".',
                error_code="INVALID_REPOSITORY",
                details={"repo": value},
            )
        return cls(owner=owner, repo=repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return self.full_name


# =============================================================================
# Main Configuration
# =============================================================================
class DownloaderConfig(BaseSettings):
    """Top-level configuration for one downloader invocation.

    Attributes:
        github_token: Credential for the listing and download endpoints.
            Required when the "github" service is used.
        repo: Repository identity as "owner/repo".
        path: Destination directory. Empty values fall back to "./".
        name: Artifact name filter. Empty means "every distinct name".
        latest: Keep only the single most recently updated artifact.
            Only a case-insensitive "true" enables it.
        service: Artifact service backend: "github" or "mock".
        api_base_url: REST API root (GitHub Enterprise Server support).
        per_page: Page size used when listing artifacts.
        timeout_seconds: Timeout applied to every HTTP request.
        output_file: File receiving the step outputs (GITHUB_OUTPUT).
        log_level: Logging level for structlog.

    Example:
        >>> config = DownloaderConfig(repo="octocat/hello-world", latest="TRUE")
        >>> config.latest
        True
        >>> config.repository.repo
        'hello-world'
    """

    # -------------------------------------------------------------------------
    # Action Inputs
    # -------------------------------------------------------------------------
    github_token: Optional[str] = Field(
        default=None,
        description="Token used to authenticate against the artifact service",
    )
    repo: str = Field(
        default="",
        description="Repository identity as 'owner/repo'",
    )
    path: str = Field(
        default="./",
        description="Destination directory for extracted artifacts",
    )
    name: str = Field(
        default="",
        description="Only download artifacts with this exact name (empty = all)",
    )
    latest: bool = Field(
        default=False,
        description="Only download the most recently updated artifact",
    )

    # -------------------------------------------------------------------------
    # Service Settings
    # -------------------------------------------------------------------------
    service: Literal["github", "mock"] = Field(
        default="github",
        description="Artifact service backend",
    )
    api_base_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_API_URL", "INPUT_API_BASE_URL"),
        description="Root URL of the REST API",
    )
    per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Page size for the artifact listing",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds",
    )

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------
    output_file: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OUTPUT", "INPUT_OUTPUT_FILE"),
        description="File receiving step outputs (None = log them only)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @field_validator("github_token", "output_file", mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        return value or None

    @field_validator("repo", "name", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("path", mode="before")
    @classmethod
    def _default_path(cls, value: Any) -> Any:
        return value or "./"

    @field_validator("latest", mode="before")
    @classmethod
    def _parse_latest(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() == "true"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    # -------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------

    @property
    def repository(self) -> RepositoryIdentity:
        """The parsed repository identity.

        Raises:
            ConfigurationError: If repo is not in "owner/repo" form.
        """
        return RepositoryIdentity.parse(self.repo)

    @property
    def has_name_filter(self) -> bool:
        return bool(self.name)

    def require_token(self) -> str:
        """Return the token, failing when it was not supplied."""
        if not self.github_token:
            raise ConfigurationError(
                message="Input required and not supplied: github_token",
                error_code="MISSING_TOKEN",
            )
        return self.github_token


# =============================================================================
# Configuration Loader
# =============================================================================
def load_config(path: Optional[str] = None, **overrides: Any) -> DownloaderConfig:
    """Load configuration from an optional YAML file and the environment.

    Args:
        path: Path to a YAML file. If None, download-artifact.yaml in the
            current directory is used when it exists.
        **overrides: Explicit values that win over the file and environment.

    Returns:
        A validated DownloaderConfig.

    Raises:
        ConfigurationError: If the file is missing (explicit path only),
            is not valid YAML, or a value fails validation.
    """
    if path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            path = str(default_path)

    yaml_data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(
                message=f"Configuration file not found: {path}",
                error_code="CONFIG_FILE_NOT_FOUND",
                details={"path": path},
            )

        try:
            with open(config_path) as f:
                raw_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                message=f"Invalid YAML in {path}: {e}",
                error_code="INVALID_CONFIG_FILE",
                details={"path": path},
            ) from e
        if isinstance(raw_data, dict):
            yaml_data = raw_data

    yaml_data.update(overrides)
    try:
        return DownloaderConfig(**yaml_data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError(
            message=f"Invalid configuration: {'; '.join(problems)}",
            error_code="INVALID_CONFIG",
            details={"errors": problems},
        ) from e
