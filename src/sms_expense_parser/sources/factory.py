from sms_expense_parser.logger import get_logger
from sms_expense_parser.sources.base import MessageSource
from sms_expense_parser.sources.demo import DemoMessageSource
from sms_expense_parser.sources.export import ExportFileMessageSource
from sms_expense_parser.sources.unavailable import UnavailableMessageSource

logger = get_logger(__name__)

SOURCE_KINDS = ("none", "demo", "file")


def create_message_source(kind: str | None, path: str | None = None) -> MessageSource:
    """Pick the message backend once, at startup."""
    normalized = (kind or "none").strip().lower()
    if normalized == "demo":
        return DemoMessageSource()
    if normalized == "file":
        if not path:
            logger.warning("[SOURCE] MESSAGE_SOURCE=file but MESSAGE_SOURCE_PATH is unset; SMS import disabled.")
            return UnavailableMessageSource()
        return ExportFileMessageSource(path)
    if normalized != "none":
        logger.warning("[SOURCE] Unknown message source '%s'; SMS import disabled.", kind)
    return UnavailableMessageSource()
