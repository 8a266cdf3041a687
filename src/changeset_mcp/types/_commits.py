"""tree and commit types"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


class FileEntry(BaseModel):
    """a file to write into the new tree"""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str


def ensure_unique_paths(files: list[FileEntry]) -> list[FileEntry]:
    """reject changesets that write the same path twice"""
    seen: set[str] = set()
    duplicates = []
    for entry in files:
        if entry.path in seen:
            duplicates.append(entry.path)
        seen.add(entry.path)
    if duplicates:
        raise ValueError(f"duplicate file paths in changeset: {sorted(duplicates)}")
    return files


class TreeObject(BaseModel):
    """tree created by the remote"""

    sha: str

    @classmethod
    def from_api_response(cls, response: dict[str, Any]) -> "TreeObject":
        return cls(sha=response["sha"])


class CommitAuthor(BaseModel):
    """author identity recorded on a commit"""

    name: str
    email: str


class CommitObject(BaseModel):
    """commit information"""

    sha: str
    parent_sha: str | None = None  # first parent; None for a root commit
    tree_sha: str
    author_name: str
    author_email: str
    author_date: str
    message: str

    @classmethod
    def from_api_response(cls, response: dict[str, Any]) -> "CommitObject":
        """construct from raw git commit response

        Args:
            response: raw response from the GitHub commits API with structure:
                {
                    "sha": "abc123",
                    "tree": {"sha": "def456"},
                    "parents": [{"sha": "789abc"}],
                    "author": {"name": "...", "email": "...", "date": "..."},
                    "message": "..."
                }

        Returns:
            CommitObject with the first parent flattened out
        """
        parents = response.get("parents") or []
        author = response["author"]
        return cls(
            sha=response["sha"],
            parent_sha=parents[0]["sha"] if parents else None,
            tree_sha=response["tree"]["sha"],
            author_name=author["name"],
            author_email=author["email"],
            author_date=author["date"],
            message=response["message"],
        )


class CommitMetadata(BaseModel):
    """author and message for the changeset commit"""

    model_config = ConfigDict(populate_by_name=True)

    author_name: str = Field(alias="authorName")
    author_email: str = Field(alias="authorEmail")
    commit_message: str = Field(alias="commitMessage")

    @property
    def author(self) -> CommitAuthor:
        return CommitAuthor(name=self.author_name, email=self.author_email)


class ChangesetCommit(BaseModel):
    """files plus commit metadata for one publish"""

    model_config = ConfigDict(populate_by_name=True)

    source_files: Annotated[
        list[FileEntry], AfterValidator(ensure_unique_paths)
    ] = Field(alias="sourceFiles")
    commit_metadata: CommitMetadata = Field(alias="commitMetaData")
