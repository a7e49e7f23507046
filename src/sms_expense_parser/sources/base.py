from abc import ABC, abstractmethod
from dataclasses import dataclass

from sms_expense_parser.models import RawMessage


@dataclass(frozen=True)
class PermissionStatus:
    sms: bool
    contacts: bool = False


class MessageSource(ABC):
    name: str = "base"

    @property
    def available(self) -> bool:
        return True

    @abstractmethod
    def request_permissions(self) -> PermissionStatus:
        """Ask for (or check) access to the device's messages."""
        pass

    @abstractmethod
    def read_messages(self, limit: int = 100) -> list[RawMessage]:
        """Return up to `limit` messages, newest first."""
        pass
