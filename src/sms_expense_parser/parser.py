from collections.abc import Iterable, Mapping, Sequence
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from sms_expense_parser.categories.resolver import CategoryResolver
from sms_expense_parser.domain.dates import format_duration, to_transaction_date
from sms_expense_parser.errors import InvalidBatchError
from sms_expense_parser.logger import get_logger
from sms_expense_parser.models import (
    CategoryDefinition,
    ParseBatchResult,
    ParsedExpenseCandidate,
    RawMessage,
)
from sms_expense_parser.parsing.amount import extract_amount
from sms_expense_parser.parsing.classifier import ClassificationPolicy, is_transaction_sms
from sms_expense_parser.parsing.description import extract_description
from sms_expense_parser.parsing.payment import infer_payment_method

logger = get_logger(__name__)


def _ensure_sequence(value: Any, what: str) -> Sequence[Any]:
    if value is None or isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise InvalidBatchError(f"{what} must be a list, got {type(value).__name__}.")
    return list(value)


def coerce_messages(messages: Any) -> list[RawMessage]:
    """
    Validate a batch of messages.

    Elements that fail validation are dropped. The batch is rejected only when
    it is not a sequence or when none of its elements is a valid message.
    """
    items = _ensure_sequence(messages, "messages")
    valid: list[RawMessage] = []
    for index, item in enumerate(items):
        if isinstance(item, RawMessage):
            valid.append(item)
            continue
        try:
            valid.append(RawMessage.model_validate(item))
        except ValidationError as exc:
            logger.debug("[PARSE] Dropping message #%d: %s", index, exc.errors()[0].get("msg"))

    if items and not valid:
        raise InvalidBatchError("No element of the batch is a valid message (sender, body and timestamp).")
    return valid


def coerce_catalog(categories: Any) -> list[CategoryDefinition]:
    if categories is None:
        return []
    items = _ensure_sequence(categories, "categories")
    catalog: list[CategoryDefinition] = []
    for item in items:
        if isinstance(item, CategoryDefinition):
            catalog.append(item)
            continue
        try:
            catalog.append(CategoryDefinition.model_validate(item))
        except ValidationError:
            logger.debug("[PARSE] Skipping invalid category entry: %r", item)
    return catalog


class SmsExpenseParser:
    def __init__(
        self,
        resolver: CategoryResolver | None = None,
        policy: ClassificationPolicy = ClassificationPolicy.ANY,
    ) -> None:
        self.resolver = resolver or CategoryResolver()
        self.policy = policy

    def is_transaction(self, message: RawMessage) -> bool:
        return is_transaction_sms(message.sender_id, message.body, self.policy)

    def parse_message(
        self, message: RawMessage, categories: Sequence[CategoryDefinition]
    ) -> ParsedExpenseCandidate | None:
        if not self.is_transaction(message):
            logger.debug("[PARSE] Not a transaction SMS from '%s'.", message.sender_id)
            return None

        amount = extract_amount(message.body)
        if amount is None:
            logger.debug("[PARSE] No amount found in SMS from '%s'.", message.sender_id)
            return None

        try:
            transaction_date = to_transaction_date(message.timestamp_ms)
        except OverflowError:
            logger.debug("[PARSE] Timestamp %s out of range; skipping.", message.timestamp_ms)
            return None

        description = extract_description(message.body)
        return ParsedExpenseCandidate(
            amount=amount,
            description=description,
            category_id=self.resolver.resolve(message.body, description, categories),
            transaction_date=transaction_date,
            payment_method=infer_payment_method(message.body),
        )

    def parse_batch(self, messages: Any, categories: Any = None) -> ParseBatchResult:
        """Parse every message in input order; failures are simply left out."""
        started = perf_counter()
        items = _ensure_sequence(messages, "messages")
        batch = coerce_messages(items)
        catalog = coerce_catalog(categories)

        candidates: list[ParsedExpenseCandidate] = []
        for message in batch:
            candidate = self.parse_message(message, catalog)
            if candidate is not None:
                candidates.append(candidate)

        logger.info(
            "[PARSE] Parsed %d expenses from %d messages (%d valid) in %s.",
            len(candidates),
            len(items),
            len(batch),
            format_duration(perf_counter() - started),
        )
        return ParseBatchResult(
            candidates=candidates,
            processed_messages=len(items),
            parsed_expenses=len(candidates),
        )
