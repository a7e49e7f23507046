from sms_expense_parser.errors import MessageSourceUnavailable
from sms_expense_parser.models import RawMessage
from sms_expense_parser.sources.base import MessageSource, PermissionStatus

UNAVAILABLE_MESSAGE = "SMS reading is only available on mobile devices. Please use the mobile app."


class UnavailableMessageSource(MessageSource):
    """Backend for environments without access to a phone's inbox."""

    name = "none"

    @property
    def available(self) -> bool:
        return False

    def request_permissions(self) -> PermissionStatus:
        raise MessageSourceUnavailable(UNAVAILABLE_MESSAGE)

    def read_messages(self, limit: int = 100) -> list[RawMessage]:
        raise MessageSourceUnavailable(UNAVAILABLE_MESSAGE)
