"""public types API for the changeset MCP server"""

from changeset_mcp.types._branches import BranchRef
from changeset_mcp.types._commits import (
    ChangesetCommit,
    CommitAuthor,
    CommitMetadata,
    CommitObject,
    FileEntry,
    TreeObject,
)
from changeset_mcp.types._common import RepoIdentifier, RepositoryCoordinate
from changeset_mcp.types._notifications import (
    CollectingSink,
    Notification,
    NotificationSink,
    PublishResult,
)
from changeset_mcp.types._pulls import (
    PullRequestAlreadyExists,
    PullRequestCreated,
    PullRequestFailed,
    PullRequestResult,
    PullRequestSpec,
    PullRequestWithChangesetCommit,
)

__all__ = [
    "BranchRef",
    "ChangesetCommit",
    "CollectingSink",
    "CommitAuthor",
    "CommitMetadata",
    "CommitObject",
    "FileEntry",
    "Notification",
    "NotificationSink",
    "PublishResult",
    "PullRequestAlreadyExists",
    "PullRequestCreated",
    "PullRequestFailed",
    "PullRequestResult",
    "PullRequestSpec",
    "PullRequestWithChangesetCommit",
    "RepoIdentifier",
    "RepositoryCoordinate",
    "TreeObject",
]
