"""
Remote Sync Layer for CodeSync.
Turns an Artifact into a conditional create-or-update write on GitHub.
"""
from typing import Optional

from codesync.adapters.github import GitHubContentsAdapter
from codesync.config import config
from codesync.errors import CodeSyncError, ConfigurationError
from codesync.generators.artifact_formatter import ArtifactFormatter
from codesync.models.artifact import Artifact, GitHubConfig, SyncResult
from codesync.models.messages import SyncRequest, SyncResponse
from codesync.utils.logger import LayerLogger

SUCCESS_MESSAGE = "Successfully pushed to GitHub!"
COMMIT_MESSAGE = "Add solution: {title}"
INCOMPLETE_CONFIG_MESSAGE = (
    "GitHub configuration incomplete. Please set token, username, "
    "and repository in the extension popup."
)

logger = LayerLogger("github_config")


def resolve_github_config(partial: Optional[GitHubConfig] = None) -> GitHubConfig:
    """
    Fill fields missing from a request with the stored settings.

    Raises:
        ConfigurationError: token, username or repo is still missing
    """
    partial = partial or GitHubConfig()
    resolved = GitHubConfig(
        token=partial.token or config.GITHUB_TOKEN,
        username=partial.username or config.GITHUB_USERNAME,
        repo=partial.repo or config.GITHUB_REPO,
    )
    if not resolved.is_complete():
        missing = resolved.missing_fields()
        logger.log_error(
            "GitHub configuration incomplete",
            error_type="configuration_error",
            missing=missing,
            unset_env=config.get_missing_github_vars(),
        )
        raise ConfigurationError(INCOMPLETE_CONFIG_MESSAGE, missing=missing)
    return resolved


class RemoteSyncLayer:
    """
    Remote sync - idempotent upsert of one artifact file.

    Steps, strictly in order:
    1. Check configuration (no network before this passes)
    2. Format the artifact into path + content
    3. Probe the path for its current revision id
    4. PUT the content, attaching the revision id when one exists

    The revision check narrows but does not close the window between probe
    and write; a change landing in between makes the write fail with a
    conflict instead of being retried.
    """

    def __init__(
        self,
        formatter: Optional[ArtifactFormatter] = None,
        adapter: Optional[GitHubContentsAdapter] = None,
    ):
        self.formatter = formatter or ArtifactFormatter()
        self.adapter = adapter or GitHubContentsAdapter()
        self.logger = LayerLogger("remote_sync")

    async def sync(self, artifact: Artifact, github: Optional[GitHubConfig] = None) -> SyncResult:
        """
        Push artifact to the configured repository.

        Raises:
            ConfigurationError: GitHub settings incomplete
            RemoteStoreError: the write was rejected
        """
        github = resolve_github_config(github)
        formatted = self.formatter.format(artifact)

        self.logger.log_action(
            "sync",
            "started",
            path=formatted.path,
            repo=f"{github.username}/{github.repo}",
        )

        async with self.adapter.client() as client:
            sha = await self.adapter.get_file_sha(client, github, formatted.path)

            self.logger.log_decision(
                decision="update_file" if sha else "create_file",
                reason="existing revision found" if sha else "no existing revision",
                path=formatted.path,
            )

            result = await self.adapter.put_file(
                client,
                github,
                formatted.path,
                formatted.content,
                message=COMMIT_MESSAGE.format(title=artifact.title),
                sha=sha,
            )

        html_url = (result.get("content") or {}).get("html_url")

        self.logger.log_action("sync", "completed", path=formatted.path, url=html_url)

        return SyncResult(message=SUCCESS_MESSAGE, url=html_url, path=formatted.path)


async def handle_sync_request(
    request: SyncRequest,
    sync_layer: Optional[RemoteSyncLayer] = None,
) -> SyncResponse:
    """Run a sync request and reply with {success, result?, error?}."""
    sync_layer = sync_layer or RemoteSyncLayer()
    try:
        result = await sync_layer.sync(request.problem_data, request.github_config)
    except CodeSyncError as e:
        return SyncResponse(success=False, error=e.message)
    return SyncResponse(success=True, result=result)
