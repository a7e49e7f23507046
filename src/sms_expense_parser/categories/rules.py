import json
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # Keywords match at the start of a word: "domino" hits "dominos", "emi" skips "premium".
    return re.compile(r"(?<!\w)" + re.escape(keyword.lower()))


@dataclass(frozen=True)
class CategoryRule:
    name: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(_keyword_pattern(keyword).search(text) for keyword in self.keywords)


# Evaluated top to bottom; the first rule whose category exists in the catalog wins.
DEFAULT_CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("Fuel", ("fuel", "petrol", "diesel", "gas", "bpcl", "iocl", "hpcl")),
    CategoryRule("Fastag", ("fastag", "toll", "highway")),
    CategoryRule("Electricity Bill", ("electricity", "electric", "power", "kseb", "bescom", "adani")),
    CategoryRule("Credit Card Payment", ("credit card", "card payment", "cc payment")),
    CategoryRule("Loan Payment", ("loan", "emi", "personal loan", "home loan")),
    CategoryRule("Internet Bill", ("internet", "broadband", "wifi", "airtel", "jio", "bsnl")),
    CategoryRule("Phone Bill", ("mobile", "phone", "recharge", "prepaid", "postpaid")),
    CategoryRule("Water Bill", ("water", "bwssb", "municipal")),
    CategoryRule("Insurance", ("insurance", "policy", "premium")),
    CategoryRule("Food", ("food", "restaurant", "cafe", "zomato", "swiggy", "domino")),
    CategoryRule("Transport", ("uber", "ola", "taxi", "auto", "metro", "bus")),
    CategoryRule("Shopping", ("shopping", "amazon", "flipkart", "myntra", "store")),
    CategoryRule("Medical", ("medical", "hospital", "pharmacy", "doctor", "medicine")),
    CategoryRule("Rent", ("rent", "house rent", "apartment")),
)


def parse_rules(raw: Any) -> tuple[CategoryRule, ...]:
    if not isinstance(raw, list):
        raise ValueError("Category rules must be a JSON list.")

    rules: list[CategoryRule] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"Rule #{index} must be an object.")
        name = str(entry.get("name") or "").strip()
        keywords = entry.get("keywords")
        if not name:
            raise ValueError(f"Rule #{index} is missing a name.")
        if not isinstance(keywords, list) or not keywords:
            raise ValueError(f"Rule '{name}' needs a non-empty keywords list.")
        cleaned = tuple(str(k).strip().lower() for k in keywords if str(k).strip())
        if not cleaned:
            raise ValueError(f"Rule '{name}' has only blank keywords.")
        rules.append(CategoryRule(name=name, keywords=cleaned))
    return tuple(rules)


def load_rules_file(path: str) -> tuple[CategoryRule, ...]:
    """Read an ordered rule list: [{"name": "Fuel", "keywords": ["petrol", ...]}, ...]."""
    with open(path, encoding="utf-8") as handle:
        return parse_rules(json.load(handle))
