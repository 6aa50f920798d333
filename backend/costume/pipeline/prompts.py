"""Prompt builder for the costume breakdown call."""

from __future__ import annotations

from costume.models.contracts import Quality
from costume.pipeline.vendors import TRUSTED_VENDORS
from costume.utils.prompt_versioning import load_versioned_prompt

SYSTEM_PROMPT_NAME = "costume_system"
USER_PROMPT_NAME = "costume_user"

_QUALITY_GUIDANCE: dict[str, str] = {
    "cheaper": (
        "Choose the lowest-cost items that still clearly read as the costume; "
        "favor budget-friendly vendors and generic brands."
    ),
    "better": (
        "Choose higher-quality, more durable items and well-known brands, "
        "using more of the budget where it improves the costume."
    ),
    "normal": "Balance cost and quality.",
}


def format_budget(budget: float) -> str:
    """Render a budget without trailing zeros: 100.0 -> '100', 17.5 -> '17.5'."""
    return f"{budget:.2f}".rstrip("0").rstrip(".")


def build_system_prompt(budget: float, quality: Quality | None = None) -> str:
    quality = quality or "normal"
    template = load_versioned_prompt(SYSTEM_PROMPT_NAME)
    return template.format(
        trusted_vendors=", ".join(TRUSTED_VENDORS),
        budget=format_budget(budget),
        quality=quality,
        quality_guidance=_QUALITY_GUIDANCE.get(quality, _QUALITY_GUIDANCE["normal"]),
    )


def build_user_prompt(description: str, budget: float) -> str:
    template = load_versioned_prompt(USER_PROMPT_NAME)
    return template.format(description=description, budget=format_budget(budget))


def build_messages(
    description: str,
    budget: float,
    quality: Quality | None = None,
) -> list[dict[str, str]]:
    """Build the [system, user] chat messages for one costume request.

    Accepts any description; rejecting blank input is the caller's job.
    """
    return [
        {"role": "system", "content": build_system_prompt(budget, quality)},
        {"role": "user", "content": build_user_prompt(description, budget)},
    ]
