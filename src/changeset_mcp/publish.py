"""publish a changeset as a pull request

branch -> tree -> commit -> ref update -> pull request, strictly in order.
any fatal failure stops the remaining stages and is raised as one
PublishError whose __cause__ is the typed error.
"""

import logging

import httpx

from changeset_mcp import _github
from changeset_mcp._github._commits import Clock
from changeset_mcp._github._errors import error_for_status
from changeset_mcp.types import (
    Notification,
    NotificationSink,
    PullRequestAlreadyExists,
    PullRequestCreated,
    PullRequestFailed,
    PullRequestResult,
    PullRequestWithChangesetCommit,
)

logger = logging.getLogger(__name__)

ALREADY_EXISTS_MESSAGE = "PR updated with new commit (branch already exists)."


def issue_pull_request_with_token(
    descriptor: PullRequestWithChangesetCommit,
    token: str,
    sink: NotificationSink | None,
    client: httpx.Client | None = None,
    clock: Clock | None = None,
) -> PullRequestResult:
    """commit the changeset to its source branch and open a pull request

    Args:
        descriptor: pull request details plus files and commit metadata
        token: GitHub bearer token
        sink: where the outcome is reported; exactly one notification is sent
            on success, none on failure. a sink that raises fails the publish
        client: optional open HTTP client; one is opened (and closed) per call
            otherwise
        clock: source of the commit author date

    Returns:
        PullRequestCreated or PullRequestAlreadyExists

    Raises:
        PublishError: wrapping the GitHubAPIError or HostUnavailableError
            that stopped the publish
    """
    close_client = client is None
    http_client = client or _github.open_client(token)
    try:
        result = _publish(descriptor, token, http_client, clock)
        _report(result, sink)
        return result
    except (_github.GitHubAPIError, _github.HostUnavailableError) as e:
        logger.error("publish failed: %s", e)
        raise _github.PublishError(f"Unhandled error in GitHub response\n{e}") from e
    finally:
        if close_client:
            http_client.close()


def _publish(
    descriptor: PullRequestWithChangesetCommit,
    token: str,
    client: httpx.Client,
    clock: Clock | None,
) -> PullRequestResult:
    pr = descriptor.pull_request
    changeset = descriptor.changeset_commit
    repo = pr.source

    branch = _github.resolve_or_create_branch(
        token, repo, pr.destination_branch, pr.source_branch, client=client
    )
    tree = _github.build_tree(
        token, repo, branch.tip_commit_sha, changeset.source_files, client=client
    )
    _github.publish_commit(
        token,
        repo,
        pr.source_branch,
        branch.tip_commit_sha,
        tree.sha,
        changeset.commit_metadata.author,
        changeset.commit_metadata.commit_message,
        client=client,
        clock=clock,
    )

    result = _github.issue_pull_request(token, pr, client=client)
    if isinstance(result, PullRequestFailed):
        error_cls = error_for_status(result.status_code or 0)
        raise error_cls(result.message, result.status_code, result.payload)
    return result


def _report(result: PullRequestResult, sink: NotificationSink | None) -> None:
    if sink is None:
        raise _github.HostUnavailableError("No active window")

    if isinstance(result, PullRequestCreated):
        notification = Notification.success(result.url)
    elif isinstance(result, PullRequestAlreadyExists):
        notification = Notification.info(ALREADY_EXISTS_MESSAGE)
    else:
        return

    try:
        sink.show_notification(notification)
    except Exception as e:
        raise _github.HostUnavailableError(
            f"failed to show notification: {e}"
        ) from e
