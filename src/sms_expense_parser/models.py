from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer

# Amounts stay Decimal in Python and go out as plain JSON numbers.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class PaymentMethod(str, Enum):
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    DIGITAL_WALLET = "Digital Wallet"
    BANK_TRANSFER = "Bank Transfer"


class RawMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sender_id: str = Field(
        validation_alias=AliasChoices("senderId", "sender_id", "address"),
        serialization_alias="senderId",
    )
    body: str
    timestamp_ms: int = Field(
        validation_alias=AliasChoices("timestampMs", "timestamp_ms", "date"),
        serialization_alias="timestampMs",
    )


class CategoryDefinition(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    name: str


class ParsedExpenseCandidate(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    amount: JsonDecimal = Field(gt=0)
    description: str = Field(min_length=1)
    category_id: str = Field(alias="categoryId")  # "" only when the catalog is empty
    transaction_date: date = Field(alias="transactionDate")
    payment_method: PaymentMethod = Field(alias="paymentMethod")


class ParseBatchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidates: list[ParsedExpenseCandidate] = Field(default_factory=list)
    processed_messages: int = Field(0, alias="processedMessages")
    parsed_expenses: int = Field(0, alias="parsedExpenses")
