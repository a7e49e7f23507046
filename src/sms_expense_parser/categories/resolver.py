from collections.abc import Sequence

from rapidfuzz import fuzz, process, utils

from sms_expense_parser.categories.rules import DEFAULT_CATEGORY_RULES, CategoryRule
from sms_expense_parser.logger import get_logger
from sms_expense_parser.models import CategoryDefinition

logger = get_logger(__name__)

DEFAULT_CATEGORY_NAME = "Misc"
DEFAULT_MATCH_THRESHOLD = 90.0


class CategoryResolver:
    """
    Maps transaction text onto one of the caller's categories.

    Rule names are looked up in the catalog case-insensitively first, then by
    whole-name similarity (so "Electricity Bill" also finds "Electricity Bills").
    Containment does not count: "Food" never resolves to "Pet Food".
    A threshold of 0 turns the fuzzy step off. The default category is only
    ever matched exactly.
    """

    def __init__(
        self,
        rules: Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES,
        default_category_name: str = DEFAULT_CATEGORY_NAME,
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
    ) -> None:
        self.rules = tuple(rules)
        self.default_category_name = default_category_name
        self.match_threshold = match_threshold

    @staticmethod
    def find_exact(
        name: str, catalog: Sequence[CategoryDefinition]
    ) -> CategoryDefinition | None:
        target = name.strip().casefold()
        for category in catalog:
            if category.name.strip().casefold() == target:
                return category
        return None

    def find_category(
        self, name: str, catalog: Sequence[CategoryDefinition]
    ) -> CategoryDefinition | None:
        exact = self.find_exact(name, catalog)
        if exact:
            return exact

        if self.match_threshold <= 0 or not catalog:
            return None

        result = process.extractOne(
            name,
            [category.name for category in catalog],
            scorer=fuzz.ratio,
            processor=utils.default_process,
            score_cutoff=self.match_threshold,
        )
        if result is None:
            return None
        _, score, index = result
        logger.debug("[CATEGORY] Fuzzy matched '%s' -> '%s' (%.1f)", name, catalog[index].name, score)
        return catalog[index]

    def fallback_category_id(self, catalog: Sequence[CategoryDefinition]) -> str:
        default = self.find_exact(self.default_category_name, catalog)
        if default:
            return default.id
        if catalog:
            return catalog[0].id
        return ""

    def resolve(
        self, body: str, description: str, catalog: Sequence[CategoryDefinition]
    ) -> str:
        text = f"{body} {description}".lower()
        for rule in self.rules:
            if not rule.matches(text):
                continue
            category = self.find_category(rule.name, catalog)
            if category:
                return category.id
            logger.debug("[CATEGORY] Rule '%s' matched but is not in the catalog.", rule.name)
        return self.fallback_category_id(catalog)
