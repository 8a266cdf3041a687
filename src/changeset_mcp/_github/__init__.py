"""GitHub API client"""

from changeset_mcp._github._branches import (
    create_branch,
    get_branch,
    resolve_or_create_branch,
)
from changeset_mcp._github._client import make_github_request, open_client
from changeset_mcp._github._commits import (
    build_tree,
    create_commit,
    get_commit,
    publish_commit,
    update_branch,
)
from changeset_mcp._github._errors import (
    AuthorizationError,
    BranchResolutionError,
    ConflictError,
    GitHubAPIError,
    HostUnavailableError,
    NotFoundError,
    PublishError,
    TransportError,
)
from changeset_mcp._github._pulls import issue_pull_request

__all__ = [
    "make_github_request",
    "open_client",
    "get_branch",
    "create_branch",
    "resolve_or_create_branch",
    "build_tree",
    "get_commit",
    "create_commit",
    "update_branch",
    "publish_commit",
    "issue_pull_request",
    "AuthorizationError",
    "BranchResolutionError",
    "ConflictError",
    "GitHubAPIError",
    "HostUnavailableError",
    "NotFoundError",
    "PublishError",
    "TransportError",
]
