from typing import Annotated

from fastapi import Header, HTTPException, Request

from sms_expense_parser.parser import SmsExpenseParser
from sms_expense_parser.services.importer import SmsImporter
from sms_expense_parser.services.ingestion import IngestionPipeline
from sms_expense_parser.sources.base import MessageSource


def get_parser(request: Request) -> SmsExpenseParser:
    parser = getattr(request.app.state, "parser", None)
    if not parser:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return parser


def get_pipeline(request: Request) -> IngestionPipeline:
    pipeline = getattr(request.app.state, "pipeline", None)
    if not pipeline:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return pipeline


def get_importer(request: Request) -> SmsImporter:
    importer = getattr(request.app.state, "importer", None)
    if not importer:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return importer


def get_source(request: Request) -> MessageSource:
    source = getattr(request.app.state, "source", None)
    if not source:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return source


def get_access_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
