from typing import Any

import pytest
from samples import AMAZON_SMS, DAY_MS, DOMINOS_SMS, JAN_5_2025_MS, PETROL_SMS

from sms_expense_parser.models import CategoryDefinition


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def catalog() -> list[CategoryDefinition]:
    return [
        CategoryDefinition(id="cat-fuel", name="Fuel"),
        CategoryDefinition(id="cat-food", name="Food"),
        CategoryDefinition(id="cat-shopping", name="Shopping"),
        CategoryDefinition(id="cat-transport", name="Transport"),
        CategoryDefinition(id="cat-misc", name="Misc"),
    ]


@pytest.fixture
def sample_messages() -> list[dict[str, Any]]:
    return [
        {"address": "HDFCBK", "body": PETROL_SMS, "date": JAN_5_2025_MS, "type": 1},
        {"address": "PAYTM", "body": DOMINOS_SMS, "date": JAN_5_2025_MS - DAY_MS, "type": 1},
        {"address": "ICICIBK", "body": AMAZON_SMS, "date": JAN_5_2025_MS - 2 * DAY_MS, "type": 1},
    ]
