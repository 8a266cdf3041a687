"""branch lookup and creation"""

import logging

import httpx

from changeset_mcp._github._client import (
    make_github_request,
    parse_api_response,
    quote_ref,
)
from changeset_mcp._github._errors import (
    BranchResolutionError,
    GitHubAPIError,
    NotFoundError,
)
from changeset_mcp.types import BranchRef, RepositoryCoordinate

logger = logging.getLogger(__name__)

BRANCH_RESOLUTION_MESSAGE = (
    "Error looking up or creating branch. Is your GitHub token authorized?"
)


def get_branch(
    token: str,
    repo: RepositoryCoordinate,
    branch: str,
    client: httpx.Client | None = None,
) -> BranchRef:
    """look up a branch ref

    Raises:
        NotFoundError: if the branch does not exist
    """
    response = make_github_request(
        "GET",
        f"{repo.api_path}/git/ref/heads/{quote_ref(branch)}",
        token,
        client=client,
    )
    return parse_api_response(BranchRef.from_api_response, response, "branch ref")


def create_branch(
    token: str,
    repo: RepositoryCoordinate,
    base_branch: str,
    branch: str,
    client: httpx.Client | None = None,
) -> BranchRef:
    """create `branch` pointing at the current tip of `base_branch`

    Args:
        token: GitHub bearer token
        repo: repository to create the branch in
        base_branch: existing branch to start from
        branch: name of the new branch

    Returns:
        the new branch ref
    """
    base = get_branch(token, repo, base_branch, client=client)
    response = make_github_request(
        "POST",
        f"{repo.api_path}/git/refs",
        token,
        json_body={"ref": f"refs/heads/{branch}", "sha": base.tip_commit_sha},
        client=client,
    )
    created = parse_api_response(BranchRef.from_api_response, response, "branch ref")
    logger.info(
        "created branch %s in %s from %s at %s",
        branch,
        repo,
        base_branch,
        created.tip_commit_sha,
    )
    return created


def resolve_or_create_branch(
    token: str,
    repo: RepositoryCoordinate,
    base_branch: str,
    target_branch: str,
    client: httpx.Client | None = None,
) -> BranchRef:
    """return the tip of `target_branch`, creating it from `base_branch` if absent

    Args:
        token: GitHub bearer token
        repo: repository holding both branches
        base_branch: branch to fork from when the target does not exist yet
        target_branch: branch the changeset will be committed to

    Returns:
        the target branch ref

    Raises:
        BranchResolutionError: on any failure other than the target being absent,
            including a missing base branch
    """
    try:
        try:
            return get_branch(token, repo, target_branch, client=client)
        except NotFoundError:
            logger.info("branch %s not found in %s, creating it", target_branch, repo)
            return create_branch(token, repo, base_branch, target_branch, client=client)
    except GitHubAPIError as e:
        raise BranchResolutionError(
            BRANCH_RESOLUTION_MESSAGE, e.status_code, e.payload
        ) from e
