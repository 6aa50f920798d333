"""Results layout: wear-order rows and regenerate budgets."""

from __future__ import annotations

from dataclasses import dataclass

from costume.models.contracts import CostumeItem

MIN_BUDGET = 20.0
MAX_BUDGET = 300.0
DEFAULT_FORM_BUDGET = 100
BUDGET_STEP = 10

CHEAPER_FACTOR = 0.7
BETTER_FACTOR = 1.3

# Top of the body to the feet; headwear is reported as "accessory".
WEAR_ORDER: tuple[str, ...] = ("accessory", "top", "bottom", "footwear")

_ROW_LABELS: dict[str, str] = {
    "accessory": "Headwear & accessories",
    "top": "Top",
    "bottom": "Bottom",
    "footwear": "Footwear",
    "other": "Other pieces",
}


@dataclass
class CardRow:
    category: str
    label: str
    items: list[CostumeItem]


def cheaper_budget(budget: float) -> float:
    return max(MIN_BUDGET, round(budget * CHEAPER_FACTOR, 2))


def better_budget(budget: float) -> float:
    return min(MAX_BUDGET, round(budget * BETTER_FACTOR, 2))


def regenerate_budget(budget: float, direction: str) -> float:
    if direction == "cheaper":
        return cheaper_budget(budget)
    if direction == "better":
        return better_budget(budget)
    raise ValueError(f"Unknown regenerate direction: {direction!r}")


def group_by_wear_position(items: list[CostumeItem]) -> list[CardRow]:
    """Group items into non-empty rows in wear order, keeping input order.

    Categories outside WEAR_ORDER land in a trailing "other" row instead of
    being hidden.
    """
    buckets: dict[str, list[CostumeItem]] = {key: [] for key in (*WEAR_ORDER, "other")}
    for item in items:
        key = item.category if item.category in WEAR_ORDER else "other"
        buckets[key].append(item)
    return [
        CardRow(category=key, label=_ROW_LABELS[key], items=rows)
        for key, rows in buckets.items()
        if rows
    ]
