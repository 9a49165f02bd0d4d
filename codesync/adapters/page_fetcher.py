"""
Static page fetcher.
Used by the bridge's local fallback when the page context does not answer.
"""
from typing import Optional

import httpx

from codesync.config import config
from codesync.extraction.document import PageDocument
from codesync.utils.logger import LayerLogger


class PageFetcher:
    """
    Fetches page markup over HTTP.
    
    The result carries no live editor state, so code recovered from it is
    limited to what the server renders.
    """
    
    def __init__(
        self,
        timeout: int = config.REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self.logger = LayerLogger("page_fetcher")
    
    async def fetch(self, url: str, reason: str = "bridge_fallback") -> PageDocument:
        """
        Fetch HTML from URL and wrap it as a PageDocument.
        
        Args:
            url: The URL to fetch
            reason: Why fetching is being used (for logging)
        
        Returns:
            PageDocument without editor values
        """
        self.logger.log_action("fetch_html", "started", url=url, reason=reason)
        
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url, headers=self._get_headers())
                response.raise_for_status()
                html = response.text
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"Failed to fetch URL: {str(e)}",
                error_type="http_error",
                url=url
            )
            raise
        
        self.logger.log_action(
            "fetch_html", 
            "completed", 
            url=url,
            status_code=response.status_code,
            content_length=len(html)
        )
        
        return PageDocument(str(response.url), html)
    
    def _get_headers(self) -> dict:
        """Get request headers mimicking a browser."""
        return {
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }
