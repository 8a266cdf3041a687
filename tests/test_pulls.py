"""tests for issuing pull requests"""

import httpx

from changeset_mcp._github import issue_pull_request
from changeset_mcp.types import (
    PullRequestAlreadyExists,
    PullRequestCreated,
    PullRequestFailed,
    PullRequestSpec,
)


def _spec(**overrides) -> PullRequestSpec:
    fields = {
        "source_owner": "alice",
        "source_repo": "demo",
        "source_branch": "feature-x",
        "destination_branch": "main",
        "title": "Add feature x",
        "description": "adds x",
    }
    fields.update(overrides)
    return PullRequestSpec(**fields)


class TestIssuePullRequest:
    """test issue_pull_request outcomes"""

    def test_creates_pull_in_source_repo(self, fake_github, client):
        """unset destination owner opens head=feature-x base=main in the source repo"""
        result = issue_pull_request("t", _spec(), client=client)

        assert isinstance(result, PullRequestCreated)
        assert result.url == "https://github.com/alice/demo/pull/1"
        assert result.number == 1
        assert fake_github.calls == [("POST", "/repos/alice/demo/pulls")]
        (body,) = fake_github.bodies("POST", "/pulls")
        assert body == {
            "title": "Add feature x",
            "body": "adds x",
            "head": "feature-x",
            "base": "main",
            "maintainer_can_modify": False,
            "draft": False,
        }

    def test_same_owner_is_not_prefixed(self, fake_github, client):
        """an explicit destination owner equal to the source owner adds no prefix"""
        issue_pull_request("t", _spec(destination_owner="alice"), client=client)

        (body,) = fake_github.bodies("POST", "/pulls")
        assert body["base"] == "main"

    def test_cross_owner_is_prefixed(self, fake_github, client):
        """a different destination owner targets their repo with a qualified base"""
        result = issue_pull_request(
            "t", _spec(destination_owner="bob", draft=True), client=client
        )

        assert isinstance(result, PullRequestCreated)
        assert fake_github.calls == [("POST", "/repos/bob/demo/pulls")]
        (body,) = fake_github.bodies("POST", "/pulls")
        assert body["base"] == "alice:main"
        assert body["head"] == "feature-x"
        assert body["draft"] is True

    def test_existing_pull_is_not_an_error(self, fake_github, client):
        """a 422 from the remote is the already-exists outcome"""
        fake_github.pulls[("alice/demo", "feature-x", "main")] = 7

        result = issue_pull_request("t", _spec(), client=client)

        assert isinstance(result, PullRequestAlreadyExists)

    def test_other_errors_fail_with_payload(self, fake_github, client):
        """non-422 errors are a failed outcome carrying the raw payload"""
        fake_github.errors[("POST", "/pulls")] = (
            403,
            {"message": "Resource not accessible by integration"},
        )

        result = issue_pull_request("t", _spec(), client=client)

        assert isinstance(result, PullRequestFailed)
        assert result.status_code == 403
        assert result.payload == {"message": "Resource not accessible by integration"}
        assert "Resource not accessible by integration" in result.message

    def test_network_failure_fails(self):
        """transport errors become a failed outcome without a status"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection reset", request=request)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            result = issue_pull_request("t", _spec(), client=client)

        assert isinstance(result, PullRequestFailed)
        assert result.status_code is None
        assert "connection reset" in result.message

    def test_response_without_url_fails(self, fake_github, client):
        """a success response without html_url is treated as a failure"""
        fake_github.errors[("POST", "/pulls")] = (201, {"number": 3})

        result = issue_pull_request("t", _spec(), client=client)

        assert isinstance(result, PullRequestFailed)
        assert result.payload == {"number": 3}
