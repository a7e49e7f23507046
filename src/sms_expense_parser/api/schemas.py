from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParseRequest(BaseModel):
    # Elements are validated by the parser so one bad message does not sink the batch.
    messages: list[Any]
    categories: list[Any] = Field(default_factory=list)


class SmsExpenseParserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sms_messages: list[Any] = Field(alias="smsMessages")


class SourceStatus(BaseModel):
    source: str
    available: bool
    sms: bool
