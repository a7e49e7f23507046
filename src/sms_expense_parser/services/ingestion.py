import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sms_expense_parser.errors import BackendError, BackendNotConfigured, UnauthorizedError
from sms_expense_parser.integration.supabase import SupabaseClient
from sms_expense_parser.logger import get_logger
from sms_expense_parser.models import ParseBatchResult, ParsedExpenseCandidate
from sms_expense_parser.parser import SmsExpenseParser

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    processed_messages: int
    parsed_expenses: int
    inserted_expenses: int

    def as_response(self) -> dict[str, Any]:
        return {
            "success": True,
            "processedMessages": self.processed_messages,
            "parsedExpenses": self.parsed_expenses,
            "insertedExpenses": self.inserted_expenses,
        }


def build_expense_rows(
    candidates: Sequence[ParsedExpenseCandidate], user_id: str
) -> list[dict[str, Any]]:
    return [
        {
            "user_id": user_id,
            "amount": float(candidate.amount),
            "description": candidate.description,
            "category_id": candidate.category_id or None,
            "date": candidate.transaction_date.isoformat(),
            "payment_method": candidate.payment_method.value,
            "recurring_enabled": False,
        }
        for candidate in candidates
    ]


class IngestionPipeline:
    """Authenticate, load the user's categories, parse, store."""

    def __init__(self, parser: SmsExpenseParser, store: SupabaseClient) -> None:
        self.parser = parser
        self.store = store

    async def parse(self, messages: Any, categories: Any) -> ParseBatchResult:
        return await asyncio.to_thread(self.parser.parse_batch, messages, categories)

    async def authenticate(self, access_token: str) -> str:
        if not access_token:
            raise UnauthorizedError("Missing access token.")
        user = await self.store.get_user(access_token)
        if not user:
            raise UnauthorizedError("Invalid or expired access token.")
        return str(user["id"])

    async def ingest(self, messages: Any, access_token: str | None) -> IngestionResult:
        access_token = access_token or ""
        user_id = await self.authenticate(access_token)

        try:
            categories = await self.store.get_categories(user_id, access_token)
        except BackendNotConfigured:
            raise
        except BackendError as exc:
            raise BackendError("Failed to fetch categories") from exc

        result = await self.parse(messages, categories)
        logger.info(
            "[INGEST] Parsed %d expenses from %d SMS messages for user %s.",
            result.parsed_expenses,
            result.processed_messages,
            user_id,
        )

        rows = build_expense_rows(result.candidates, user_id)
        if rows:
            try:
                stored = await self.store.insert_expenses(rows, access_token)
            except BackendNotConfigured:
                raise
            except BackendError as exc:
                raise BackendError("Failed to save expenses") from exc
            logger.info("[INGEST] Successfully inserted %d expenses.", len(stored))

        return IngestionResult(
            processed_messages=result.processed_messages,
            parsed_expenses=result.parsed_expenses,
            inserted_expenses=len(rows),
        )
