"""outcome notifications handed to the host"""

from typing import Literal, Protocol

from pydantic import BaseModel, Field

from changeset_mcp.types._pulls import PullRequestResult


class Notification(BaseModel):
    """one categorical outcome for the host to render"""

    kind: Literal["success", "info", "error"]
    message: str
    url: str | None = None

    @classmethod
    def success(cls, url: str) -> "Notification":
        return cls(kind="success", message=f"😎 PR Created:\n{url}", url=url)

    @classmethod
    def info(cls, message: str) -> "Notification":
        return cls(kind="info", message=message)


class NotificationSink(Protocol):
    """anything that can render a publish outcome"""

    def show_notification(self, notification: Notification) -> None: ...


class CollectingSink:
    """sink that keeps notifications in memory for the caller to return"""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def show_notification(self, notification: Notification) -> None:
        self.notifications.append(notification)


class PublishResult(BaseModel):
    """result of publishing a changeset"""

    pull_request: PullRequestResult
    notifications: list[Notification] = Field(default_factory=list)
