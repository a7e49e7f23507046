from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query

from sms_expense_parser.api.dependencies import get_access_token, get_importer, get_pipeline
from sms_expense_parser.api.schemas import SmsExpenseParserRequest
from sms_expense_parser.core import settings
from sms_expense_parser.errors import (
    BackendError,
    BackendNotConfigured,
    InvalidBatchError,
    UnauthorizedError,
)
from sms_expense_parser.logger import get_logger
from sms_expense_parser.services.importer import SmsImporter
from sms_expense_parser.services.ingestion import IngestionPipeline

logger = get_logger(__name__)

router = APIRouter()


@router.post("/sms-expense-parser")
async def sms_expense_parser(
    req: SmsExpenseParserRequest,
    pipeline: Annotated[IngestionPipeline, Depends(get_pipeline)],
    access_token: Annotated[str | None, Depends(get_access_token)],
) -> dict[str, Any]:
    logger.info("[INGEST] Processing %d SMS messages.", len(req.sms_messages))
    try:
        result = await pipeline.ingest(req.sms_messages, access_token)
    except UnauthorizedError as exc:
        logger.warning("[INGEST] Auth error: %s", exc)
        raise HTTPException(status_code=401, detail="Unauthorized") from exc
    except BackendNotConfigured as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except InvalidBatchError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except BackendError as exc:
        logger.error("[INGEST] %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return result.as_response()


@router.post("/import")
async def import_sms(
    importer: Annotated[SmsImporter, Depends(get_importer)],
    access_token: Annotated[str | None, Depends(get_access_token)],
    limit: Annotated[int | None, Query(ge=1, le=1000)] = None,
) -> dict[str, Any]:
    if limit is None:
        limit = settings.get_env_int("IMPORT_LIMIT", settings.DEFAULT_IMPORT_LIMIT, min_value=1)
    outcome = await importer.import_recent(access_token, limit=limit)
    return outcome.as_response()
