"""GitHub export of a file bundle.

With a token, creates a repository for the authenticated account and
uploads each file through the contents API. Without one, returns the URL
the repository would have, making no network calls.
"""

import base64

import httpx

from builddost.config import Settings
from builddost.errors import ExportFailure
from builddost.logging_config import get_logger

from .packager import ensure_relative_paths

logger = get_logger(__name__)

GITHUB_API_URL = "https://api.github.com"


class GitHubExporter:
    """Pushes export bundles to new GitHub repositories."""

    def __init__(
        self,
        token: str = "",
        owner: str = "user",
        api_url: str = GITHUB_API_URL,
        timeout: float = 30.0,
    ):
        self.token = token
        self.owner = owner
        self.api_url = api_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubExporter":
        return cls(token=settings.github_token, owner=settings.github_owner)

    @property
    def enabled(self) -> bool:
        return bool(self.token)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }

    async def export(
        self, bundle: dict[str, str], repository: str, description: str = ""
    ) -> str:
        """Create ``repository`` holding ``bundle``; return its URL.

        Raises:
            ExportFailure: If a path is not relative or any GitHub API call fails
        """
        ensure_relative_paths(bundle)
        if not self.enabled:
            url = f"https://github.com/{self.owner}/{repository}"
            logger.info("github_export_stubbed", repository=repository, repo_url=url)
            return url

        try:
            async with httpx.AsyncClient(
                base_url=self.api_url, headers=self._headers(), timeout=self.timeout
            ) as client:
                resp = await client.post(
                    "/user/repos",
                    json={"name": repository, "description": description, "private": False},
                )
                resp.raise_for_status()
                data = resp.json()
                owner = data.get("owner", {}).get("login", self.owner)
                repo_url = data.get("html_url") or f"https://github.com/{owner}/{repository}"
                logger.info("github_repo_created", owner=owner, name=repository, repo_url=repo_url)

                for path, content in bundle.items():
                    resp = await client.put(
                        f"/repos/{owner}/{repository}/contents/{path}",
                        json={
                            "message": f"Add {path}",
                            "content": base64.b64encode(content.encode()).decode(),
                        },
                    )
                    resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "github_export_failed",
                repository=repository,
                status_code=e.response.status_code,
                error=e.response.text[:500],
            )
            raise ExportFailure(
                f"GitHub API returned {e.response.status_code} for {e.request.url}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("github_export_failed", repository=repository, error=str(e))
            raise ExportFailure(f"GitHub request failed: {e}") from e

        logger.info("github_export_completed", repository=repository, files=len(bundle))
        return repo_url
