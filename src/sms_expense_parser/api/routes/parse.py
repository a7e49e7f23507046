import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from sms_expense_parser.api.dependencies import get_parser
from sms_expense_parser.api.schemas import ParseRequest
from sms_expense_parser.errors import InvalidBatchError
from sms_expense_parser.models import ParseBatchResult
from sms_expense_parser.parser import SmsExpenseParser

router = APIRouter()


@router.post("/parse", response_model=ParseBatchResult)
async def parse_messages(
    req: ParseRequest,
    parser: Annotated[SmsExpenseParser, Depends(get_parser)],
) -> ParseBatchResult:
    try:
        return await asyncio.to_thread(parser.parse_batch, req.messages, req.categories)
    except InvalidBatchError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
