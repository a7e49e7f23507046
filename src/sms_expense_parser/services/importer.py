import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sms_expense_parser.core import settings
from sms_expense_parser.domain.dates import is_recent
from sms_expense_parser.errors import (
    MessageSourceUnavailable,
    SmsExpenseParserError,
    UnauthorizedError,
)
from sms_expense_parser.logger import get_logger
from sms_expense_parser.models import RawMessage
from sms_expense_parser.parsing.classifier import ClassificationPolicy, is_transaction_sms
from sms_expense_parser.services.ingestion import IngestionPipeline
from sms_expense_parser.sources.base import MessageSource

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImportOutcome:
    success: bool
    processed_count: int
    error: str | None = None

    def as_response(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "processedCount": self.processed_count,
            "error": self.error,
        }


class SmsImporter:
    """Read recent transaction SMS from the configured source and store them as expenses."""

    def __init__(
        self,
        source: MessageSource,
        pipeline: IngestionPipeline,
        policy: ClassificationPolicy = ClassificationPolicy.ANY,
        recent_days: int = settings.DEFAULT_RECENT_WINDOW_DAYS,
    ) -> None:
        self.source = source
        self.pipeline = pipeline
        self.policy = policy
        self.recent_days = recent_days

    def select_recent_transactions(
        self, messages: Sequence[RawMessage], now: datetime
    ) -> list[RawMessage]:
        return [
            message
            for message in messages
            if is_recent(message.timestamp_ms, now, self.recent_days)
            and is_transaction_sms(message.sender_id, message.body, self.policy)
        ]

    async def import_recent(
        self,
        access_token: str | None,
        limit: int = settings.DEFAULT_IMPORT_LIMIT,
        now: datetime | None = None,
    ) -> ImportOutcome:
        now = now or datetime.now(timezone.utc)
        try:
            messages = await asyncio.to_thread(self.source.read_messages, limit)
        except MessageSourceUnavailable as exc:
            logger.warning("[IMPORT] Message source '%s' unavailable: %s", self.source.name, exc)
            return ImportOutcome(success=False, processed_count=0, error=str(exc))

        selected = self.select_recent_transactions(messages, now)
        logger.info(
            "[IMPORT] %d of %d messages are recent transaction SMS.",
            len(selected),
            len(messages),
        )
        if not selected:
            return ImportOutcome(success=True, processed_count=0)

        try:
            result = await self.pipeline.ingest(selected, access_token)
        except UnauthorizedError as exc:
            logger.warning("[IMPORT] Unauthorized: %s", exc)
            return ImportOutcome(
                success=False,
                processed_count=0,
                error="Your session has expired. Please sign in again to import SMS expenses.",
            )
        except SmsExpenseParserError as exc:
            logger.error("[IMPORT] Import failed: %s", exc)
            return ImportOutcome(success=False, processed_count=0, error=str(exc))

        return ImportOutcome(success=True, processed_count=result.inserted_expenses)
