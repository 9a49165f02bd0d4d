"""Shared fixtures: page snapshots and an in-memory GitHub contents store."""
import hashlib
import json
from typing import Dict, List

import httpx
import pytest

from codesync.adapters.github import GitHubContentsAdapter
from codesync.config import Config
from codesync.layers.sync import RemoteSyncLayer
from codesync.models.artifact import Artifact, GitHubConfig, Platform

LEETCODE_URL = "https://leetcode.com/problems/two-sum/"

LEETCODE_HTML = """
<html><body>
  <div data-cy="question-title">1. Two Sum</div>
  <div data-cy="description">
    <p>Given an array of integers nums and an integer target, return indices of the two numbers.</p>
    <p>You may assume that each input would have exactly one solution.</p>
  </div>
  <button data-cy="lang-select">Python3</button>
  <div class="monaco-editor">
    <div class="view-lines">
      <div class="view-line">class Solution:   </div>
      <div class="view-line">    def twoSum(self, nums, target):</div>
    </div>
  </div>
</body></html>
"""


class FakeContentsStore:
    """GitHub contents endpoint backed by a dict, with sha-checked writes."""

    def __init__(self):
        self.files: Dict[str, Dict[str, str]] = {}
        self.requests: List[httpx.Request] = []
        self.writes = 0

    def path_of(self, request: httpx.Request) -> str:
        return request.url.path.split("/contents/", 1)[1]

    def put_payloads(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == "PUT"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self.path_of(request)
        existing = self.files.get(path)

        if request.method == "GET":
            if existing is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={"path": path, "sha": existing["sha"]})

        body = json.loads(request.content)
        if existing is not None and body.get("sha") != existing["sha"]:
            return httpx.Response(409, json={"message": f"{path} does not match {body.get('sha')}"})

        self.writes += 1
        sha = hashlib.sha1(f"{self.writes}:{body['content']}".encode()).hexdigest()
        self.files[path] = {"sha": sha, "content": body["content"]}
        return httpx.Response(
            200 if existing else 201,
            json={
                "content": {
                    "path": path,
                    "sha": sha,
                    "html_url": f"https://github.com/octocat/solutions/blob/main/{path}",
                },
                "commit": {"message": body["message"]},
            },
        )


@pytest.fixture
def store() -> FakeContentsStore:
    return FakeContentsStore()


@pytest.fixture
def sync_layer(store) -> RemoteSyncLayer:
    adapter = GitHubContentsAdapter(
        api_url="https://api.github.com",
        branch="main",
        transport=httpx.MockTransport(store.handler),
    )
    return RemoteSyncLayer(adapter=adapter)


@pytest.fixture
def github() -> GitHubConfig:
    return GitHubConfig(token="ghp_test", username="octocat", repo="solutions")


@pytest.fixture
def no_stored_settings(monkeypatch):
    """Clear GitHub settings that may come from the environment."""
    monkeypatch.setattr(Config, "GITHUB_TOKEN", None)
    monkeypatch.setattr(Config, "GITHUB_USERNAME", None)
    monkeypatch.setattr(Config, "GITHUB_REPO", None)


@pytest.fixture
def two_sum() -> Artifact:
    return Artifact(
        platform=Platform.LEETCODE,
        title="1. Two Sum",
        problem_number="1",
        description="Given an array of integers nums and an integer target.",
        code="class Solution:\n    pass",
        language="python",
        url=LEETCODE_URL,
    )
