"""
Page-context message channel.

The channel mimics window.postMessage between the page's own execution
context and the privileged caller: messages are plain dicts tagged by a
"type" key, delivered to every listener on a later loop iteration. The
page-side PageContextResponder answers extraction requests with whatever
the page can see, including live editor models.
"""
import asyncio
from typing import Awaitable, Callable, List, Optional, Set

from codesync.extraction.document import PageDocument
from codesync.extraction.platforms import extract
from codesync.models.artifact import Artifact
from codesync.utils.logger import LayerLogger

EXTRACT_REQUEST = "CODESYNC_EXTRACT_REQUEST"
EXTRACT_RESPONSE = "CODESYNC_EXTRACT_RESPONSE"

Listener = Callable[[dict], None]
DocumentSource = Callable[[], Awaitable[PageDocument]]


class PageChannel:
    """In-process postMessage-style channel."""

    def __init__(self):
        self._listeners: List[Listener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: Listener):
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def post_message(self, message: dict):
        """Queue delivery of message to the current listeners."""
        loop = asyncio.get_running_loop()
        for listener in list(self._listeners):
            loop.call_soon(listener, dict(message))


class PageContextResponder:
    """
    Page-side end of the bridge.

    Listens for extraction requests and posts exactly one tagged response
    per request, carrying the serialized Artifact or None.
    """

    def __init__(
        self,
        channel: PageChannel,
        document_source: DocumentSource,
        extractor: Callable[[PageDocument], Optional[Artifact]] = extract,
    ):
        self.channel = channel
        self.document_source = document_source
        self.extractor = extractor
        self.logger = LayerLogger("page_context")
        self._tasks: Set[asyncio.Task] = set()

    def attach(self):
        self.channel.add_listener(self._on_message)

    def detach(self):
        self.channel.remove_listener(self._on_message)
        for task in self._tasks:
            task.cancel()

    def _on_message(self, message: dict):
        if message.get("type") != EXTRACT_REQUEST:
            return
        task = asyncio.get_running_loop().create_task(self._respond())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _respond(self):
        try:
            document = await self.document_source()
        except Exception as e:
            # No response is posted; the caller's timeout takes over
            self.logger.log_error(
                f"Could not read page state: {e}",
                error_type="page_state_unavailable",
            )
            return

        artifact = self.extractor(document)
        self.channel.post_message({
            "type": EXTRACT_RESPONSE,
            "data": artifact.to_message() if artifact else None,
        })
        self.logger.log_action(
            "page_extraction",
            "completed",
            found=artifact is not None,
            live_state=document.has_live_state,
        )


def snapshot_source(document: PageDocument) -> DocumentSource:
    """Document source for a snapshot that was captured up front."""
    async def source() -> PageDocument:
        return document
    return source
