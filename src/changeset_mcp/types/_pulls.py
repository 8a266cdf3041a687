"""pull request-related types"""

from typing import Annotated, Any, Literal, cast

from pydantic import BaseModel, ConfigDict, Field

from changeset_mcp.types._commits import ChangesetCommit
from changeset_mcp.types._common import RepositoryCoordinate


class PullRequestSpec(BaseModel):
    """what to open: source branch, destination and PR text"""

    model_config = ConfigDict(populate_by_name=True)

    source_owner: str = Field(alias="sourceOwner")
    source_repo: str = Field(alias="sourceRepo")
    source_branch: str = Field(alias="sourceBranch")
    destination_owner: str | None = Field(default=None, alias="destinationOwner")
    destination_repo: str | None = Field(default=None, alias="destinationRepo")
    destination_branch: str = Field(alias="destinationBranch")
    title: str = Field(alias="subject")
    description: str | None = None
    maintainer_can_modify: bool = Field(default=False, alias="maintainerCanModify")
    draft: bool = False

    @property
    def source(self) -> RepositoryCoordinate:
        return RepositoryCoordinate(owner=self.source_owner, name=self.source_repo)

    @property
    def is_cross_owner(self) -> bool:
        """whether the PR targets a repository owned by someone else"""
        return bool(self.destination_owner) and self.destination_owner != self.source_owner

    @property
    def destination(self) -> RepositoryCoordinate:
        """repository the pull request is opened against"""
        owner = self.source_owner
        if self.is_cross_owner:
            owner = cast(str, self.destination_owner)
        return RepositoryCoordinate(
            owner=owner, name=self.destination_repo or self.source_repo
        )

    @property
    def base(self) -> str:
        """destination branch, owner-qualified when it lives in another owner's fork"""
        if self.is_cross_owner:
            return f"{self.source_owner}:{self.destination_branch}"
        return self.destination_branch


class PullRequestCreated(BaseModel):
    """a new pull request was opened"""

    state: Literal["created"] = "created"
    url: str
    number: int | None = None


class PullRequestAlreadyExists(BaseModel):
    """a pull request for this branch pair was already open

    the commit pushed just before has updated it; the remote does not say
    which pull request that is, so there is no URL.
    """

    state: Literal["already_exists"] = "already_exists"


class PullRequestFailed(BaseModel):
    """the remote rejected the pull request for any other reason"""

    state: Literal["failed"] = "failed"
    status_code: int | None = None
    message: str
    payload: Any = None


PullRequestResult = Annotated[
    PullRequestCreated | PullRequestAlreadyExists | PullRequestFailed,
    Field(discriminator="state"),
]


class PullRequestWithChangesetCommit(BaseModel):
    """input descriptor for one publish call"""

    model_config = ConfigDict(populate_by_name=True)

    pull_request: PullRequestSpec = Field(alias="pullRequest")
    changeset_commit: ChangesetCommit = Field(alias="changesetCommit")
