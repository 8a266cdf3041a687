"""shared types and validators"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict


def normalize_repo_identifier(v: str) -> str:
    """normalize repo identifier to owner/repo format without @ prefix"""
    if "/" not in v:
        raise ValueError(f"invalid repo format: '{v}'. expected 'owner/repo'")
    owner, repo_name = v.split("/", 1)
    # strip @ from owner if present
    owner = owner.lstrip("@")
    if not owner or not repo_name:
        raise ValueError(f"invalid repo format: '{v}'. expected 'owner/repo'")
    return f"{owner}/{repo_name}"


RepoIdentifier = Annotated[str, AfterValidator(normalize_repo_identifier)]


class RepositoryCoordinate(BaseModel):
    """owner and name of a remote repository"""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @classmethod
    def from_identifier(cls, identifier: str) -> "RepositoryCoordinate":
        """construct from an 'owner/repo' or '@owner/repo' identifier"""
        owner, name = normalize_repo_identifier(identifier).split("/", 1)
        return cls(owner=owner, name=name)

    @property
    def api_path(self) -> str:
        """path prefix for repository-scoped REST endpoints"""
        return f"/repos/{self.owner}/{self.name}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"
