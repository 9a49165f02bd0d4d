"""Adapters package initialization."""
from codesync.adapters.github import GitHubContentsAdapter
from codesync.adapters.page_channel import PageChannel, PageContextResponder
from codesync.adapters.page_fetcher import PageFetcher

__all__ = ["GitHubContentsAdapter", "PageChannel", "PageContextResponder", "PageFetcher"]
