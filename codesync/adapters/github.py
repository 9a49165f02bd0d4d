"""
GitHub Contents API adapter for CodeSync.
Reads file metadata and writes file contents in a user's repository.
"""
import base64
from typing import Any, Dict, Optional

import httpx

from codesync.config import config
from codesync.errors import RemoteStoreError
from codesync.models.artifact import GitHubConfig
from codesync.utils.logger import LayerLogger

DEFAULT_PUSH_ERROR = "Failed to push to GitHub"


def encode_content(content: str) -> str:
    """Base64 of the UTF-8 bytes."""
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


class GitHubContentsAdapter:
    """
    GitHub REST adapter for the repository contents endpoint.

    Two calls only:
    - GET  /repos/{owner}/{repo}/contents/{path}  -> current blob sha
    - PUT  /repos/{owner}/{repo}/contents/{path}  -> create or update
    """

    def __init__(
        self,
        api_url: str = config.GITHUB_API_URL,
        branch: str = config.GITHUB_BRANCH,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.branch = branch
        self.transport = transport
        self.logger = LayerLogger("github_adapter")

    def client(self) -> httpx.AsyncClient:
        """Client without an internal timeout; the caller's environment bounds waits."""
        return httpx.AsyncClient(timeout=None, transport=self.transport)

    def contents_url(self, github: GitHubConfig, path: str) -> str:
        return f"{self.api_url}/repos/{github.username}/{github.repo}/contents/{path}"

    async def get_file_sha(
        self,
        client: httpx.AsyncClient,
        github: GitHubConfig,
        path: str,
    ) -> Optional[str]:
        """
        Revision id of the file at path, or None.

        Not found, other error statuses and transport failures all mean
        "no prior revision"; none of them is raised.
        """
        url = self.contents_url(github, path)

        try:
            response = await client.get(url, headers=self._get_headers(github))
        except httpx.HTTPError as e:
            self.logger.log_http_probe(
                url=url,
                endpoint="contents",
                status_code=None,
                result="transport_error",
                error=str(e),
            )
            return None

        if response.status_code != 200:
            self.logger.log_http_probe(
                url=url,
                endpoint="contents",
                status_code=response.status_code,
                result="not_found" if response.status_code == 404 else "ignored_error",
            )
            return None

        try:
            sha = response.json().get("sha")
        except ValueError:
            sha = None

        self.logger.log_http_probe(
            url=url,
            endpoint="contents",
            status_code=response.status_code,
            result="exists" if sha else "no_sha",
        )
        return sha

    async def put_file(
        self,
        client: httpx.AsyncClient,
        github: GitHubConfig,
        path: str,
        content: str,
        message: str,
        sha: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create or update the file at path.

        With sha, the write only succeeds if the file is still at that
        revision.

        Raises:
            RemoteStoreError: the store rejected the write
        """
        url = self.contents_url(github, path)
        payload = {
            "message": message,
            "content": encode_content(content),
            "branch": self.branch,
        }
        if sha:
            payload["sha"] = sha

        self.logger.log_action(
            "github_put_contents",
            "started",
            path=path,
            branch=self.branch,
            update=bool(sha),
        )

        try:
            response = await client.put(
                url,
                headers={**self._get_headers(github), "Content-Type": "application/json"},
                json=payload,
            )
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"GitHub write failed: {e}",
                error_type="transport_error",
                path=path,
            )
            raise RemoteStoreError(f"{DEFAULT_PUSH_ERROR}: {e}") from e

        if not response.is_success:
            error_message = self._error_message(response)
            self.logger.log_error(
                f"GitHub rejected write: {error_message}",
                error_type="remote_store_error",
                status_code=response.status_code,
                path=path,
            )
            raise RemoteStoreError(error_message, status_code=response.status_code)

        self.logger.log_action(
            "github_put_contents",
            "completed",
            path=path,
            status_code=response.status_code,
        )
        try:
            return response.json()
        except ValueError:
            return {}

    def _get_headers(self, github: GitHubConfig) -> Dict[str, str]:
        return {
            "Authorization": f"token {github.token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def _error_message(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return DEFAULT_PUSH_ERROR
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return DEFAULT_PUSH_ERROR
