"""errors raised while talking to GitHub"""

from http import HTTPStatus
from typing import Any


class GitHubAPIError(RuntimeError):
    """raised when an error occurs while communicating with the GitHub API"""

    def __init__(
        self, message: str, status_code: int | None = None, payload: Any = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class AuthorizationError(GitHubAPIError):
    """credential rejected or missing scope (401/403)"""


class NotFoundError(GitHubAPIError):
    """referenced branch, commit or repository does not exist (404)"""


class ConflictError(GitHubAPIError):
    """remote state changed underneath us, e.g. a non-fast-forward ref update"""


class TransportError(GitHubAPIError):
    """network failure, malformed response or any unexpected status"""


class BranchResolutionError(GitHubAPIError):
    """the commit branch could not be looked up or created"""


class HostUnavailableError(RuntimeError):
    """there is no notification sink to report the outcome to"""


class PublishError(RuntimeError):
    """a publish call failed; the typed cause is chained as __cause__"""


_STATUS_ERRORS: dict[int, type[GitHubAPIError]] = {
    HTTPStatus.UNAUTHORIZED: AuthorizationError,
    HTTPStatus.FORBIDDEN: AuthorizationError,
    HTTPStatus.NOT_FOUND: NotFoundError,
    HTTPStatus.CONFLICT: ConflictError,
    HTTPStatus.UNPROCESSABLE_ENTITY: ConflictError,
}


def error_for_status(status_code: int) -> type[GitHubAPIError]:
    """map an HTTP status to the error class that describes it"""
    return _STATUS_ERRORS.get(status_code, TransportError)
