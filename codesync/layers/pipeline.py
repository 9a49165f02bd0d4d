"""
Capture pipeline for CodeSync.
Extract -> format -> probe -> write, strictly in that order.
"""
from typing import Optional, Tuple

from codesync.errors import NoArtifactError
from codesync.layers.bridge import ExecutionBridge
from codesync.layers.sync import RemoteSyncLayer, resolve_github_config
from codesync.models.artifact import Artifact, GitHubConfig, SyncResult
from codesync.utils.logger import LayerLogger


class CapturePipeline:
    """
    One extraction-then-sync invocation.

    Stateless between runs: nothing from a previous run is reused except
    what the remote store itself persisted.
    """

    def __init__(self, sync_layer: Optional[RemoteSyncLayer] = None):
        self.sync_layer = sync_layer or RemoteSyncLayer()
        self.logger = LayerLogger("capture_pipeline")

    async def run(
        self,
        bridge: ExecutionBridge,
        github: Optional[GitHubConfig] = None,
    ) -> Tuple[Artifact, SyncResult]:
        """
        Raises:
            ConfigurationError: GitHub settings incomplete (checked first)
            ExtractionUnavailableError: page context unreachable, no fallback
            NoArtifactError: extraction ran but found nothing
            RemoteStoreError: the write was rejected
        """
        github = resolve_github_config(github)

        artifact = await bridge.extract()
        if artifact is None:
            self.logger.log_decision(
                decision="skip_sync",
                reason="nothing extracted",
            )
            raise NoArtifactError(
                "No problem data found. Open a problem page on a supported platform."
            )

        result = await self.sync_layer.sync(artifact, github)
        return artifact, result
