"""pull request operations for GitHub"""

import json
import logging
from http import HTTPStatus

import httpx

from changeset_mcp._github._client import make_github_request
from changeset_mcp._github._errors import GitHubAPIError
from changeset_mcp.types import (
    PullRequestAlreadyExists,
    PullRequestCreated,
    PullRequestFailed,
    PullRequestResult,
    PullRequestSpec,
)

logger = logging.getLogger(__name__)


def issue_pull_request(
    token: str,
    spec: PullRequestSpec,
    client: httpx.Client | None = None,
) -> PullRequestResult:
    """open a pull request from `spec.source_branch` into the destination

    the destination defaults to the source repository. when it belongs to a
    different owner the base branch is sent as 'source_owner:branch'.

    Args:
        token: GitHub bearer token
        spec: source/destination branches and PR text
        client: optional open HTTP client

    Returns:
        PullRequestCreated with the PR url, PullRequestAlreadyExists when the
        remote answers 422 (the branch push already updated the open PR), or
        PullRequestFailed with the raw error payload for anything else
    """
    destination = spec.destination
    body = {
        "title": spec.title,
        "body": spec.description,
        "head": spec.source_branch,
        "base": spec.base,
        "maintainer_can_modify": spec.maintainer_can_modify,
        "draft": spec.draft,
    }

    try:
        response = make_github_request(
            "POST", f"{destination.api_path}/pulls", token, json_body=body, client=client
        )
    except GitHubAPIError as e:
        if e.status_code == HTTPStatus.UNPROCESSABLE_ENTITY:
            # github does not say which PR already exists
            logger.info(
                "pull request %s -> %s already exists in %s",
                spec.source_branch,
                spec.base,
                destination,
            )
            return PullRequestAlreadyExists()
        payload = e.payload if e.payload is not None else str(e)
        return PullRequestFailed(
            status_code=e.status_code,
            message=f"Error: {json.dumps(payload, default=str)}",
            payload=payload,
        )

    url = response.get("html_url")
    if not url:
        return PullRequestFailed(
            message=f"Error: {json.dumps(response, default=str)}", payload=response
        )

    logger.info("opened pull request %s", url)
    return PullRequestCreated(url=url, number=response.get("number"))
