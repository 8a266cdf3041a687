"""shared fixtures: an in-memory GitHub behind httpx.MockTransport"""

import itertools
import json
import re
from typing import Any

import httpx
import pytest

from changeset_mcp.types import RepositoryCoordinate

BASE_SHA = "commit-base"
BASE_TREE_SHA = "tree-base"

_REPO_PATH = re.compile(r"^/repos/([^/]+)/([^/]+)(/.*)$")


class FakeGitHub:
    """just enough of the git data and pulls API to run a publish"""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.base_sha = BASE_SHA
        self.refs: dict[str, str] = {"main": BASE_SHA}
        self.commits: dict[str, dict[str, Any]] = {
            BASE_SHA: {
                "sha": BASE_SHA,
                "tree": {"sha": BASE_TREE_SHA},
                "parents": [],
                "author": {
                    "name": "base",
                    "email": "base@example.com",
                    "date": "2024-01-01T00:00:00+00:00",
                },
                "message": "initial commit",
            }
        }
        self.trees: dict[str, dict[str, Any]] = {}
        self.pulls: dict[tuple[str, str, str], int] = {}
        self.requests: list[httpx.Request] = []
        # (method, path after /repos/{owner}/{repo}) -> (status, body)
        self.errors: dict[tuple[str, str], tuple[int, Any]] = {}
        # simulates another process pushing to the branch before our ref update
        self.concurrent_push: str | None = None

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def bodies(self, method: str, suffix: str) -> list[dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path.endswith(suffix)
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        match = _REPO_PATH.match(request.url.path)
        if not match:
            return httpx.Response(404, json={"message": "Not Found"})
        owner, repo, rest = match.groups()

        if (request.method, rest) in self.errors:
            status, body = self.errors[(request.method, rest)]
            return httpx.Response(status, json=body)

        body = json.loads(request.content) if request.content else {}

        if request.method == "GET" and rest.startswith("/git/ref/heads/"):
            return self._get_ref(rest.removeprefix("/git/ref/heads/"))
        if request.method == "POST" and rest == "/git/refs":
            return self._create_ref(body)
        if request.method == "PATCH" and rest.startswith("/git/refs/heads/"):
            return self._update_ref(rest.removeprefix("/git/refs/heads/"), body)
        if request.method == "POST" and rest == "/git/trees":
            return self._create_tree(body)
        if request.method == "GET" and rest.startswith("/git/commits/"):
            return self._get_commit(rest.removeprefix("/git/commits/"))
        if request.method == "POST" and rest == "/git/commits":
            return self._create_commit(body)
        if request.method == "POST" and rest == "/pulls":
            return self._create_pull(owner, repo, body)
        return httpx.Response(404, json={"message": "Not Found"})

    def _ref_payload(self, branch: str) -> dict[str, Any]:
        return {
            "ref": f"refs/heads/{branch}",
            "object": {"sha": self.refs[branch], "type": "commit"},
        }

    def _get_ref(self, branch: str) -> httpx.Response:
        if branch not in self.refs:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=self._ref_payload(branch))

    def _create_ref(self, body: dict[str, Any]) -> httpx.Response:
        branch = body["ref"].removeprefix("refs/heads/")
        if branch in self.refs:
            return httpx.Response(422, json={"message": "Reference already exists"})
        self.refs[branch] = body["sha"]
        return httpx.Response(201, json=self._ref_payload(branch))

    def _update_ref(self, branch: str, body: dict[str, Any]) -> httpx.Response:
        if self.concurrent_push is not None:
            self.refs[branch] = self.concurrent_push
        if branch not in self.refs:
            return httpx.Response(422, json={"message": "Reference does not exist"})
        new_commit = self.commits[body["sha"]]
        parents = [p["sha"] for p in new_commit["parents"]]
        if not body.get("force") and self.refs[branch] not in parents:
            return httpx.Response(
                422, json={"message": "Update is not a fast forward"}
            )
        self.refs[branch] = body["sha"]
        return httpx.Response(200, json=self._ref_payload(branch))

    def _create_tree(self, body: dict[str, Any]) -> httpx.Response:
        sha = f"tree-{next(self._ids)}"
        self.trees[sha] = body
        return httpx.Response(201, json={"sha": sha, "tree": body["tree"]})

    def _get_commit(self, sha: str) -> httpx.Response:
        if sha not in self.commits:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=self.commits[sha])

    def _create_commit(self, body: dict[str, Any]) -> httpx.Response:
        sha = f"commit-{next(self._ids)}"
        self.commits[sha] = {
            "sha": sha,
            "tree": {"sha": body["tree"]},
            "parents": [{"sha": parent} for parent in body["parents"]],
            "author": body["author"],
            "message": body["message"],
        }
        return httpx.Response(201, json=self.commits[sha])

    def _create_pull(
        self, owner: str, repo: str, body: dict[str, Any]
    ) -> httpx.Response:
        key = (f"{owner}/{repo}", body["head"], body["base"])
        if key in self.pulls:
            return httpx.Response(
                422,
                json={
                    "message": "Validation Failed",
                    "errors": [
                        {
                            "resource": "PullRequest",
                            "code": "custom",
                            "message": f"A pull request already exists for {owner}:{body['head']}.",
                        }
                    ],
                },
            )
        number = len(self.pulls) + 1
        self.pulls[key] = number
        return httpx.Response(
            201,
            json={
                "number": number,
                "html_url": f"https://github.com/{owner}/{repo}/pull/{number}",
                "draft": body.get("draft", False),
            },
        )


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def client(fake_github: FakeGitHub):
    with httpx.Client(transport=httpx.MockTransport(fake_github.handler)) as c:
        yield c


@pytest.fixture
def repo() -> RepositoryCoordinate:
    return RepositoryCoordinate(owner="alice", name="demo")
