"""changeset MCP server - publishes file changes to GitHub as pull requests"""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from changeset_mcp import _github
from changeset_mcp.publish import issue_pull_request_with_token
from changeset_mcp.settings import settings
from changeset_mcp.types import (
    ChangesetCommit,
    CollectingSink,
    CommitMetadata,
    FileEntry,
    PublishResult,
    PullRequestSpec,
    PullRequestWithChangesetCommit,
    RepoIdentifier,
    RepositoryCoordinate,
)

changeset_mcp = FastMCP("changeset MCP server")


def _get_token() -> str:
    if settings.github_token is None or not settings.github_token.get_secret_value():
        raise RuntimeError("GitHub token is not configured. Set GITHUB_TOKEN.")
    return settings.github_token.get_secret_value()


# resources - read-only operations
@changeset_mcp.resource("github://status")
def github_status() -> dict[str, str | bool | None]:
    """check the status of the GitHub connection"""
    token_configured = bool(
        settings.github_token and settings.github_token.get_secret_value()
    )
    status: dict[str, str | bool | None] = {
        "api_url": settings.github_api_url,
        "token_configured": token_configured,
        "authenticated": False,
        "login": None,
    }
    if not token_configured:
        return status

    try:
        user = _github.make_github_request("GET", "/user", _get_token())
    except _github.GitHubAPIError:
        return status

    status["authenticated"] = True
    status["login"] = user.get("login")
    return status


# tools - actions that modify state
@changeset_mcp.tool
def publish_changeset(
    repo: Annotated[
        RepoIdentifier,
        Field(
            description="source repository in 'owner/repo' format (e.g., 'alice/demo')"
        ),
    ],
    source_branch: Annotated[
        str, Field(description="branch to commit to; created if missing")
    ],
    destination_branch: Annotated[
        str,
        Field(description="branch the pull request targets (e.g., 'main')"),
    ],
    title: Annotated[str, Field(description="pull request title")],
    files: Annotated[
        list[FileEntry],
        Field(description="files to create or overwrite, as {path, content}"),
    ],
    author_name: Annotated[str, Field(description="commit author name")],
    author_email: Annotated[str, Field(description="commit author email")],
    commit_message: Annotated[str, Field(description="commit message")],
    description: Annotated[
        str | None, Field(description="pull request body")
    ] = None,
    destination_owner: Annotated[
        str | None,
        Field(description="owner of the destination repository, if not the source owner"),
    ] = None,
    destination_repo: Annotated[
        str | None,
        Field(description="destination repository name, if not the source repository"),
    ] = None,
    draft: Annotated[bool, Field(description="open the pull request as a draft")] = False,
    maintainer_can_modify: Annotated[
        bool, Field(description="allow maintainers to push to the source branch")
    ] = False,
) -> PublishResult:
    """commit files to a branch and open a pull request for it

    Args:
        repo: source repository in 'owner/repo' format
        source_branch: branch to commit to (created from destination_branch if missing)
        destination_branch: branch the pull request targets
        title: pull request title
        files: files to write
        author_name: commit author name
        author_email: commit author email
        commit_message: commit message
        description: optional pull request body
        destination_owner: optional owner of the destination repository
        destination_repo: optional destination repository name
        draft: open as a draft pull request
        maintainer_can_modify: let maintainers push to the source branch

    Returns:
        PublishResult with the pull request outcome and the notifications sent
    """
    source = RepositoryCoordinate.from_identifier(repo)
    descriptor = PullRequestWithChangesetCommit(
        pull_request=PullRequestSpec(
            source_owner=source.owner,
            source_repo=source.name,
            source_branch=source_branch,
            destination_owner=destination_owner,
            destination_repo=destination_repo,
            destination_branch=destination_branch,
            title=title,
            description=description,
            maintainer_can_modify=maintainer_can_modify,
            draft=draft,
        ),
        changeset_commit=ChangesetCommit(
            source_files=files,
            commit_metadata=CommitMetadata(
                author_name=author_name,
                author_email=author_email,
                commit_message=commit_message,
            ),
        ),
    )

    sink = CollectingSink()
    result = issue_pull_request_with_token(descriptor, _get_token(), sink)

    return PublishResult(pull_request=result, notifications=sink.notifications)
