"""
download_artifact.integrations.github.client - GitHub REST Artifact Service
=============================================================================

ArtifactService backed by the GitHub Actions REST API, using httpx.

Endpoints:
    GET /repos/{owner}/{repo}/actions/artifacts?per_page=100
        Paginated listing; the next page is announced in the Link header.
    GET /repos/{owner}/{repo}/actions/artifacts/{id}/zip
        Answers with a redirect whose Location is a short-lived, pre-signed
        URL on the storage host.

Two httpx clients are used: an API client carrying the token, and a plain
client for the pre-signed storage URLs, which must not receive the token.
Both accept a custom transport (httpx.MockTransport in tests).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError

from download_artifact.core.config import DownloaderConfig, RepositoryIdentity
from download_artifact.core.enums import ArchiveFormat
from download_artifact.core.exceptions import TransportError
from download_artifact.core.models import Artifact
from download_artifact.integrations.github.base import ArtifactService


API_VERSION = "2022-11-28"
REDIRECT_STATUS_CODES = frozenset({301, 302, 303, 307, 308})


class GitHubArtifactService(ArtifactService):
    """Artifact service talking to the GitHub Actions REST API.

    Args:
        config: Downloader configuration; must carry a token.
        transport: Optional transport for the API client.
        download_transport: Optional transport for archive downloads.
            Defaults to `transport`.

    Raises:
        ConfigurationError: If no token is configured.

    Example:
        >>> async with GitHubArtifactService(config) as service:
        ...     artifacts = await service.list_artifacts(config.repository)
    """

    def __init__(
        self,
        config: DownloaderConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        download_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(config)
        token = config.require_token()
        timeout = httpx.Timeout(config.timeout_seconds)

        self._api = httpx.AsyncClient(
            base_url=config.api_base_url.rstrip("/"),
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": API_VERSION,
            },
            timeout=timeout,
            follow_redirects=False,
            transport=transport,
        )
        self._downloads = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=download_transport or transport,
        )

    # =========================================================================
    # ArtifactService
    # =========================================================================

    async def iter_artifact_pages(self, identity: RepositoryIdentity) -> AsyncIterator[list[Artifact]]:
        url: Optional[str] = f"/repos/{identity.owner}/{identity.repo}/actions/artifacts"
        params: Optional[dict[str, Any]] = {"per_page": self._config.per_page}
        page_number = 0

        while url:
            response = await self._send(self._api, "GET", url, params=params)
            if response.is_error:
                raise self._status_error(response)

            page = self._parse_page(response)
            page_number += 1
            self._logger.debug(
                "artifact_page_fetched",
                repository=identity.full_name,
                page=page_number,
                artifact_count=len(page),
            )
            yield page

            # The next link already carries per_page and the page cursor.
            url = response.links.get("next", {}).get("url")
            params = None

    async def resolve_download_url(
        self,
        identity: RepositoryIdentity,
        artifact_id: Union[int, str],
        archive_format: ArchiveFormat = ArchiveFormat.ZIP,
    ) -> str:
        url = (
            f"/repos/{identity.owner}/{identity.repo}"
            f"/actions/artifacts/{artifact_id}/{archive_format.value}"
        )
        response = await self._send(self._api, "GET", url)

        location = response.headers.get("location")
        if response.status_code in REDIRECT_STATUS_CODES and location:
            return location
        if response.is_error:
            raise self._status_error(response)

        raise TransportError(
            message=f"No download location returned for artifact {artifact_id}",
            status_code=response.status_code,
            url=str(response.request.url),
            error_code="NO_DOWNLOAD_LOCATION",
        )

    async def fetch_archive(self, url: str) -> bytes:
        response = await self._send(self._downloads, "GET", url)
        if not response.is_success:
            raise TransportError(
                message=f"Failed to get '{url}' ({response.status_code})",
                status_code=response.status_code,
                url=url,
            )
        return response.content

    async def close(self) -> None:
        await self._api.aclose()
        await self._downloads.aclose()

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            return await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(
                message=f"{method} {url} failed: {e}",
                url=url,
            ) from e

    def _parse_page(self, response: httpx.Response) -> list[Artifact]:
        try:
            payload = response.json()
            raw_artifacts = payload.get("artifacts") or []
            return [Artifact.model_validate(raw) for raw in raw_artifacts]
        except (ValueError, AttributeError, ValidationError) as e:
            raise TransportError(
                message=f"Invalid artifact listing from {response.request.url}: {e}",
                status_code=response.status_code,
                url=str(response.request.url),
                error_code="INVALID_RESPONSE",
            ) from e

    @staticmethod
    def _status_error(response: httpx.Response) -> TransportError:
        """Build a TransportError from an error response, keeping GitHub's message."""
        detail = ""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = str(body.get("message") or "")

        message = f"{response.request.method} {response.request.url} returned {response.status_code}"
        if detail:
            message = f"{message}: {detail}"
        return TransportError(
            message=message,
            status_code=response.status_code,
            url=str(response.request.url),
        )
