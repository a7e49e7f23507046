from typing import Annotated

from fastapi import APIRouter, Depends

from sms_expense_parser.api.dependencies import get_source
from sms_expense_parser.api.schemas import SourceStatus
from sms_expense_parser.errors import MessageSourceUnavailable
from sms_expense_parser.sources.base import MessageSource

router = APIRouter()


@router.get("/sources/status", response_model=SourceStatus)
async def source_status(
    source: Annotated[MessageSource, Depends(get_source)],
) -> SourceStatus:
    try:
        permissions = source.request_permissions()
    except MessageSourceUnavailable:
        return SourceStatus(source=source.name, available=False, sms=False)
    return SourceStatus(source=source.name, available=source.available, sms=permissions.sms)
