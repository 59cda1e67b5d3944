"""Confirmation and notification ports used by the coordinator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NoticeLevel(str, Enum):
    """Severity of a user-facing notice."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ConfirmationRequest:
    """Content of an "are you sure" decision.

    content holds the lines the surface should display before asking, such
    as a before/after comparison.
    """

    title: str
    description: Optional[str] = None
    content: tuple[str, ...] = field(default_factory=tuple)
    confirm_string: str = "Confirm"


class ConfirmationPort(ABC):
    """Generic confirmation gate."""

    @abstractmethod
    def confirm(self, request: ConfirmationRequest) -> bool:
        """Ask the user to confirm. Returns True on confirmation."""
        pass


class Notifier(ABC):
    """Generic notification surface."""

    @abstractmethod
    def notify(self, level: NoticeLevel, message: str) -> None:
        """Surface a message to the user."""
        pass

    def info(self, message: str) -> None:
        self.notify(NoticeLevel.INFO, message)

    def success(self, message: str) -> None:
        self.notify(NoticeLevel.SUCCESS, message)

    def warning(self, message: str) -> None:
        self.notify(NoticeLevel.WARNING, message)

    def error(self, message: str) -> None:
        self.notify(NoticeLevel.ERROR, message)
