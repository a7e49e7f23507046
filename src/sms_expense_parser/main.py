import os

import uvicorn

from sms_expense_parser.app import app
from sms_expense_parser.core import settings
from sms_expense_parser.logger import get_logging_config


def run() -> None:
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=settings.get_env_int("PORT", 8000, min_value=1),
        log_config=get_logging_config(),
    )


if __name__ == "__main__":
    run()
