import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sms_expense_parser.api.routes import expenses, parse, sources
from sms_expense_parser.categories.resolver import (
    DEFAULT_CATEGORY_NAME,
    DEFAULT_MATCH_THRESHOLD,
    CategoryResolver,
)
from sms_expense_parser.categories.rules import DEFAULT_CATEGORY_RULES, CategoryRule, load_rules_file
from sms_expense_parser.core import settings
from sms_expense_parser.integration.supabase import SupabaseClient
from sms_expense_parser.logger import get_logger, setup_logging
from sms_expense_parser.parser import SmsExpenseParser
from sms_expense_parser.parsing.classifier import ClassificationPolicy
from sms_expense_parser.services.importer import SmsImporter
from sms_expense_parser.services.ingestion import IngestionPipeline
from sms_expense_parser.sources.factory import SOURCE_KINDS, create_message_source

logger = get_logger(__name__)


def _load_rules() -> tuple[CategoryRule, ...]:
    rules_path = os.getenv("CATEGORY_RULES_FILE")
    if not rules_path:
        return DEFAULT_CATEGORY_RULES
    try:
        rules = load_rules_file(rules_path)
    except (OSError, ValueError) as exc:
        logger.error("[CONFIG] Could not load category rules from %s: %s. Using built-in rules.", rules_path, exc)
        return DEFAULT_CATEGORY_RULES
    logger.info("[CONFIG] Loaded %d category rules from %s.", len(rules), rules_path)
    return rules


def classification_policy() -> ClassificationPolicy:
    value = settings.get_env_choice(
        "SMS_CLASSIFICATION_POLICY",
        ClassificationPolicy.ANY.value,
        tuple(policy.value for policy in ClassificationPolicy),
    )
    return ClassificationPolicy(value)


def build_parser() -> SmsExpenseParser:
    resolver = CategoryResolver(
        rules=_load_rules(),
        default_category_name=os.getenv("DEFAULT_CATEGORY_NAME") or DEFAULT_CATEGORY_NAME,
        match_threshold=settings.get_env_float(
            "CATEGORY_MATCH_THRESHOLD",
            DEFAULT_MATCH_THRESHOLD,
            min_value=0.0,
        ),
    )
    return SmsExpenseParser(resolver=resolver, policy=classification_policy())


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        store = SupabaseClient()
        if not store.configured:
            logger.warning("SUPABASE_URL or SUPABASE_ANON_KEY not set. Expense storage will be disabled.")

        parser = build_parser()
        source_kind = settings.get_env_choice("MESSAGE_SOURCE", "none", SOURCE_KINDS)
        source = create_message_source(source_kind, os.getenv("MESSAGE_SOURCE_PATH"))
        pipeline = IngestionPipeline(parser=parser, store=store)
        importer = SmsImporter(
            source=source,
            pipeline=pipeline,
            policy=parser.policy,
            recent_days=settings.get_env_int(
                "RECENT_WINDOW_DAYS",
                settings.DEFAULT_RECENT_WINDOW_DAYS,
                min_value=1,
            ),
        )

        app.state.parser = parser
        app.state.store = store
        app.state.source = source
        app.state.pipeline = pipeline
        app.state.importer = importer

        logger.info("Services initialized (policy=%s, source=%s).", parser.policy.value, source.name)
        yield
        await store.aclose()
        logger.info("Service shutting down.")

    app = FastAPI(title="SMS Expense Parser", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_env_list("CORS_ALLOW_ORIGINS", ["*"]),
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    app.include_router(parse.router)
    app.include_router(expenses.router)
    app.include_router(sources.router)

    return app


app = create_app()
