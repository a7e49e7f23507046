import json
import os
from typing import Any

from pydantic import ValidationError

from sms_expense_parser.errors import MessageSourceUnavailable
from sms_expense_parser.logger import get_logger
from sms_expense_parser.models import RawMessage
from sms_expense_parser.sources.base import MessageSource, PermissionStatus

logger = get_logger(__name__)


def _load_records(path: str) -> list[Any]:
    with open(path, encoding="utf-8") as handle:
        content = handle.read()

    stripped = content.lstrip()
    if not stripped:
        return []
    if stripped.startswith("["):
        data = json.loads(stripped)
        return data if isinstance(data, list) else []

    records: list[Any] = []
    for line_no, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError:
            logger.warning("[SOURCE] Skipping malformed line %d in %s.", line_no, path)
    return records


class ExportFileMessageSource(MessageSource):
    """
    Messages exported from a phone's inbox.

    Accepts a JSON array or JSON lines; each record needs a sender
    (`address` or `senderId`), a `body` and a timestamp in epoch
    milliseconds (`date` or `timestampMs`).
    """

    name = "file"

    def __init__(self, path: str) -> None:
        self.path = path

    @property
    def available(self) -> bool:
        return os.path.isfile(self.path)

    def request_permissions(self) -> PermissionStatus:
        return PermissionStatus(sms=os.access(self.path, os.R_OK))

    def read_messages(self, limit: int = 100) -> list[RawMessage]:
        if not self.available:
            raise MessageSourceUnavailable(f"SMS export not found: {self.path}")
        try:
            records = _load_records(self.path)
        except (OSError, json.JSONDecodeError) as exc:
            raise MessageSourceUnavailable(f"Could not read SMS export {self.path}: {exc}") from exc

        messages: list[RawMessage] = []
        for record in records:
            try:
                messages.append(RawMessage.model_validate(record))
            except ValidationError:
                logger.debug("[SOURCE] Skipping invalid record in %s.", self.path)

        messages.sort(key=lambda message: message.timestamp_ms, reverse=True)
        logger.info("[SOURCE] Read %d messages from %s.", len(messages), self.path)
        return messages[:max(limit, 0)]
