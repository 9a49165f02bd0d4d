"""
Execution Bridge for CodeSync.
Runs extraction inside the page's own execution context and returns the
result to the privileged caller, degrading to a local extractor on timeout.
"""
import asyncio
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

from codesync.adapters.page_channel import EXTRACT_REQUEST, EXTRACT_RESPONSE, PageChannel
from codesync.config import config
from codesync.errors import CodeSyncError, ExtractionUnavailableError
from codesync.extraction.document import PageDocument
from codesync.extraction.platforms import extract
from codesync.models.artifact import Artifact
from codesync.models.messages import ExtractResponse
from codesync.utils.logger import LayerLogger

FallbackExtractor = Callable[[], Awaitable[Optional[Artifact]]]


class ExecutionBridge:
    """
    Bridge between the caller and the page context.

    Protocol:
    1. Register a one-shot listener and post a tagged request into the page.
    2. Race the tagged response against a fixed timeout.
    3. Response first: return its payload (may be None).
    4. Timeout first: run the local fallback extractor if one is registered,
       otherwise raise ExtractionUnavailableError.

    The listener and the losing task are torn down on every path.
    """

    def __init__(
        self,
        channel: PageChannel,
        fallback_extractor: Optional[FallbackExtractor] = None,
        timeout: float = config.BRIDGE_TIMEOUT_SECONDS,
    ):
        self.channel = channel
        self.fallback_extractor = fallback_extractor
        self.timeout = timeout
        self.logger = LayerLogger("execution_bridge")

    async def extract(self) -> Optional[Artifact]:
        loop = asyncio.get_running_loop()
        response: asyncio.Future = loop.create_future()

        def listener(message: dict):
            if message.get("type") == EXTRACT_RESPONSE and not response.done():
                response.set_result(message.get("data"))

        self.channel.add_listener(listener)
        timeout_task = asyncio.ensure_future(asyncio.sleep(self.timeout))

        self.logger.log_action("page_extraction_request", "started", timeout=self.timeout)

        try:
            self.channel.post_message({"type": EXTRACT_REQUEST})
            await asyncio.wait(
                {response, timeout_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            self.channel.remove_listener(listener)
            for pending in (response, timeout_task):
                if not pending.done():
                    pending.cancel()

        if response.done() and not response.cancelled():
            self.logger.log_decision(
                decision="use_page_context_result",
                reason="response arrived before timeout",
            )
            return self._parse_payload(response.result())

        return await self._run_fallback()

    async def _run_fallback(self) -> Optional[Artifact]:
        if self.fallback_extractor is None:
            self.logger.log_error(
                "Page context did not respond and no local extractor is registered",
                error_type="extraction_unavailable",
                timeout=self.timeout,
            )
            raise ExtractionUnavailableError(
                "Extraction failed: page context timeout and no local extractor available"
            )

        self.logger.log_fallback(
            from_source="page_context",
            to_source="local_extractor",
            reason=f"no response within {self.timeout}s",
        )

        try:
            return await self.fallback_extractor()
        except CodeSyncError:
            raise
        except Exception as e:
            self.logger.log_error(
                f"Local extractor failed: {e}",
                error_type="fallback_failed",
            )
            raise ExtractionUnavailableError(f"Extraction failed: {e}") from e

    def _parse_payload(self, payload: Optional[dict]) -> Optional[Artifact]:
        if payload is None:
            return None
        try:
            return Artifact.model_validate(payload)
        except ValidationError as e:
            self.logger.log_error(
                f"Malformed extraction response: {e.error_count()} errors",
                error_type="malformed_response",
            )
            return None


def local_extractor(load_document: Callable[[], Awaitable[PageDocument]]) -> FallbackExtractor:
    """Fallback that extracts from a document loaded outside the page context."""
    async def run() -> Optional[Artifact]:
        document = await load_document()
        return extract(document)
    return run


async def handle_extract_request(bridge: ExecutionBridge) -> ExtractResponse:
    """Extract through the bridge and reply with {success, data, error?}."""
    try:
        data = await bridge.extract()
    except CodeSyncError as e:
        return ExtractResponse(success=False, data=None, error=e.message)
    return ExtractResponse(success=data is not None, data=data)
