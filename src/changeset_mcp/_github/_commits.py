"""tree, commit and ref-update operations"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

import httpx

from changeset_mcp._github._client import (
    make_github_request,
    parse_api_response,
    quote_ref,
)
from changeset_mcp.settings import BLOB_FILE_MODE
from changeset_mcp.types import (
    BranchRef,
    CommitAuthor,
    CommitObject,
    FileEntry,
    RepositoryCoordinate,
    TreeObject,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _default_clock() -> datetime:
    return datetime.now(timezone.utc)


def build_tree(
    token: str,
    repo: RepositoryCoordinate,
    base_tree_sha: str,
    files: Iterable[FileEntry],
    client: httpx.Client | None = None,
) -> TreeObject:
    """create a tree that overlays `files` on top of `base_tree_sha`

    every file is written as a regular blob; paths not listed are inherited
    from the base tree unchanged.

    Args:
        token: GitHub bearer token
        repo: repository to create the tree in
        base_tree_sha: tree (or commit) to layer the files on
        files: files to create or overwrite

    Returns:
        the new tree
    """
    tree = [
        {
            "path": entry.path,
            "content": entry.content,
            "type": "blob",
            "mode": BLOB_FILE_MODE,
        }
        for entry in files
    ]
    response = make_github_request(
        "POST",
        f"{repo.api_path}/git/trees",
        token,
        json_body={"base_tree": base_tree_sha, "tree": tree},
        client=client,
    )
    result = parse_api_response(TreeObject.from_api_response, response, "tree sha")
    logger.debug("created tree %s with %d entries", result.sha, len(tree))
    return result


def get_commit(
    token: str,
    repo: RepositoryCoordinate,
    commit_sha: str,
    client: httpx.Client | None = None,
) -> CommitObject:
    """fetch a commit object"""
    response = make_github_request(
        "GET", f"{repo.api_path}/git/commits/{commit_sha}", token, client=client
    )
    return parse_api_response(CommitObject.from_api_response, response, "commit")


def create_commit(
    token: str,
    repo: RepositoryCoordinate,
    tree_sha: str,
    parent_sha: str,
    author: CommitAuthor,
    message: str,
    client: httpx.Client | None = None,
    clock: Clock | None = None,
) -> CommitObject:
    """create a single-parent commit of `tree_sha`

    Returns:
        the created commit
    """
    date = (clock or _default_clock)().isoformat()
    response = make_github_request(
        "POST",
        f"{repo.api_path}/git/commits",
        token,
        json_body={
            "message": message,
            "tree": tree_sha,
            "parents": [parent_sha],
            "author": {"name": author.name, "email": author.email, "date": date},
        },
        client=client,
    )
    return parse_api_response(CommitObject.from_api_response, response, "commit")


def update_branch(
    token: str,
    repo: RepositoryCoordinate,
    branch: str,
    commit_sha: str,
    client: httpx.Client | None = None,
) -> BranchRef:
    """fast-forward `branch` to `commit_sha`

    Raises:
        ConflictError: if the branch moved and the update is not a fast-forward
    """
    response = make_github_request(
        "PATCH",
        f"{repo.api_path}/git/refs/heads/{quote_ref(branch)}",
        token,
        json_body={"sha": commit_sha, "force": False},
        client=client,
    )
    return parse_api_response(BranchRef.from_api_response, response, "branch ref")


def publish_commit(
    token: str,
    repo: RepositoryCoordinate,
    branch: str,
    branch_tip_sha: str,
    tree_sha: str,
    author: CommitAuthor,
    message: str,
    client: httpx.Client | None = None,
    clock: Clock | None = None,
) -> BranchRef:
    """commit `tree_sha` on top of the branch tip and advance the branch

    the parent is re-read from the remote rather than taken from
    `branch_tip_sha` directly. the ref update is never forced, so a branch that
    moved in the meantime makes this fail; there is no retry.

    Args:
        token: GitHub bearer token
        repo: repository holding the branch
        branch: branch to advance
        branch_tip_sha: tip the commit is based on
        tree_sha: tree to commit
        author: commit author
        message: commit message
        client: optional open HTTP client
        clock: source of the author date (defaults to now, UTC)

    Returns:
        the updated branch ref
    """
    parent = get_commit(token, repo, branch_tip_sha, client=client)
    commit = create_commit(
        token, repo, tree_sha, parent.sha, author, message, client=client, clock=clock
    )
    updated = update_branch(token, repo, branch, commit.sha, client=client)
    logger.info(
        "advanced %s in %s from %s to %s", branch, repo, parent.sha, commit.sha
    )
    return updated
