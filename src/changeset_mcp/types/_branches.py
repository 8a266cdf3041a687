"""branch-related types"""

from typing import Any

from pydantic import BaseModel


class BranchRef(BaseModel):
    """a branch and the commit it currently points at"""

    name: str
    tip_commit_sha: str

    @classmethod
    def from_api_response(cls, response: dict[str, Any]) -> "BranchRef":
        """construct from raw git ref response

        Args:
            response: raw response from the GitHub refs API with structure:
                {
                    "ref": "refs/heads/main",
                    "object": {"sha": "abc123", "type": "commit", ...}
                }

        Returns:
            BranchRef with the short branch name and tip sha
        """
        ref = response["ref"]
        return cls(
            name=ref.removeprefix("refs/heads/"),
            tip_commit_sha=response["object"]["sha"],
        )
