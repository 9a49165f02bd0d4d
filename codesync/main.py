"""
CodeSync - FastAPI Application
Main entry point with REST API endpoints.
"""
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from codesync import __version__
from codesync.adapters.browser import BrowserPageSource
from codesync.adapters.page_channel import PageChannel, PageContextResponder, snapshot_source
from codesync.adapters.page_fetcher import PageFetcher
from codesync.config import config
from codesync.errors import BrowserUnavailableError, CodeSyncError
from codesync.extraction.document import PageDocument
from codesync.extraction.platforms import detect_platform
from codesync.layers.bridge import ExecutionBridge, handle_extract_request, local_extractor
from codesync.layers.pipeline import CapturePipeline
from codesync.layers.sync import RemoteSyncLayer, handle_sync_request, resolve_github_config
from codesync.models.artifact import Platform
from codesync.models.messages import (
    CaptureRequest,
    CaptureResponse,
    ExtractRequest,
    ExtractResponse,
    SyncRequest,
    SyncResponse,
)
from codesync.utils.logger import LayerLogger, get_logger, set_trace_id


# Initialize FastAPI app
app = FastAPI(
    title="CodeSync",
    description="Save solved coding problems from practice sites to a GitHub repository",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize layers
sync_layer = RemoteSyncLayer()
capture_pipeline = CapturePipeline(sync_layer)
page_fetcher = PageFetcher()

logger = get_logger("main")
context_logger = LayerLogger("page_context")

UNSUPPORTED_MESSAGE = "Please navigate to a supported coding platform (LeetCode, GFG, etc.)"


class PlatformDetectionResponse(BaseModel):
    """Response model for platform detection."""
    url: str
    platform: str
    display_name: str
    supported: bool
    message: Optional[str] = None
    trace_id: str


@asynccontextmanager
async def page_context(
    url: str,
    use_browser: bool,
    snapshot: Optional[PageDocument] = None,
) -> AsyncIterator[ExecutionBridge]:
    """
    Bridge wired to a page context and a local fallback.

    With a posted snapshot, the page context sees the snapshot (including
    editor values) and the fallback sees its bare markup. Otherwise the page
    context is a headless browser and the fallback fetches the page. When the
    browser cannot be used, no page context answers and the bridge degrades
    to the fetch fallback after its timeout.
    """
    channel = PageChannel()
    timeout = config.BRIDGE_TIMEOUT_SECONDS

    if snapshot is not None:
        bare = snapshot.without_live_state()
        responder = PageContextResponder(channel, snapshot_source(snapshot))
        responder.attach()
        try:
            yield ExecutionBridge(channel, local_extractor(snapshot_source(bare)), timeout=timeout)
        finally:
            responder.detach()
        return

    fallback = local_extractor(lambda: page_fetcher.fetch(url))

    if not use_browser:
        yield ExecutionBridge(channel, fallback, timeout=timeout)
        return

    async with AsyncExitStack() as stack:
        try:
            source = await stack.enter_async_context(
                BrowserPageSource.open(url, timeout_ms=config.REQUEST_TIMEOUT * 1000)
            )
        except BrowserUnavailableError as e:
            context_logger.log_fallback(
                from_source="browser_page",
                to_source="page_fetcher",
                reason=e.message,
                url=url,
            )
            source = None

        if source is None:
            yield ExecutionBridge(channel, fallback, timeout=timeout)
            return

        responder = PageContextResponder(channel, source.snapshot)
        responder.attach()
        try:
            yield ExecutionBridge(channel, fallback, timeout=timeout)
        finally:
            responder.detach()


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "github_configured": config.is_github_configured(),
    }


@app.get("/api/detect-platform")
async def detect_platform_endpoint(url: str = Query(..., description="Page URL to classify")):
    """Report which supported platform a page address belongs to."""
    trace_id = set_trace_id()
    platform = detect_platform(url)
    supported = platform != Platform.UNKNOWN

    logger.info("platform_detection_request", url=url, platform=platform.value, trace_id=trace_id)

    return PlatformDetectionResponse(
        url=url,
        platform=platform.value,
        display_name=platform.display_name,
        supported=supported,
        message=None if supported else UNSUPPORTED_MESSAGE,
        trace_id=trace_id,
    )


@app.post("/api/extract", response_model=ExtractResponse)
async def extract_endpoint(request: ExtractRequest):
    """
    Extract problem data from a posted page snapshot.

    editor_values are the live editor model contents read inside the page.
    """
    trace_id = set_trace_id()

    logger.info(
        "extract_request",
        url=request.url,
        html_length=len(request.html),
        editors=len(request.editor_values),
        trace_id=trace_id,
    )

    snapshot = PageDocument(request.url, request.html, request.editor_values)
    try:
        async with page_context(request.url, use_browser=False, snapshot=snapshot) as bridge:
            return await handle_extract_request(bridge)
    except Exception as e:
        logger.error("extract_error", error=str(e), url=request.url)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/sync", response_model=SyncResponse, response_model_exclude_none=True)
async def sync_endpoint(request: SyncRequest):
    """
    Push an extracted artifact to GitHub.

    Replies {success, result?, error?}; configuration and GitHub errors are
    reported in error, not as HTTP failures.
    """
    trace_id = set_trace_id()

    logger.info(
        "sync_request",
        platform=request.problem_data.platform.value,
        title=request.problem_data.title,
        trace_id=trace_id,
    )

    try:
        return await handle_sync_request(request, sync_layer)
    except Exception as e:
        logger.error("sync_error", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/capture", response_model=CaptureResponse, response_model_exclude_none=True)
async def capture_endpoint(request: CaptureRequest):
    """
    Open a problem page, extract it and push it to GitHub.
    """
    trace_id = set_trace_id()

    logger.info(
        "capture_request",
        url=request.url,
        use_browser=request.use_browser,
        trace_id=trace_id,
    )

    try:
        # Settings are checked before the page is opened or fetched
        github = resolve_github_config(request.github_config)
        async with page_context(request.url, use_browser=request.use_browser) as bridge:
            artifact, result = await capture_pipeline.run(bridge, github)
    except CodeSyncError as e:
        return CaptureResponse(success=False, error=e.message)
    except Exception as e:
        logger.error("capture_error", error=str(e), url=request.url)
        raise HTTPException(status_code=500, detail=str(e))

    return CaptureResponse(success=True, data=artifact, result=result)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=config.HOST,
        port=config.PORT,
        log_level="debug" if config.DEBUG else "info",
    )
