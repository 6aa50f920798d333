"""Costume pipeline: prompt -> model call -> JSON extraction -> normalization.

Stateless: everything comes in with the request, nothing is kept afterwards.
Any failure is terminal for the invocation.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from costume.config import settings
from costume.models.contracts import CostumeRequest, CostumeResponse
from costume.pipeline.extraction import extract_json, raw_items
from costume.pipeline.normalize import compute_total, normalize_items
from costume.pipeline.prompts import build_messages

log = structlog.get_logger("costume.pipeline")


class ModelClient(Protocol):
    async def complete(self, messages: list[dict[str, str]]) -> str: ...


async def generate_costume(request: CostumeRequest, client: ModelClient) -> CostumeResponse:
    budget = request.budget or settings.default_budget
    quality = request.quality or "normal"

    log.info(
        "costume_pipeline_start",
        description_chars=len(request.description),
        budget=budget,
        quality=quality,
    )

    messages = build_messages(request.description, budget, quality)
    text = await client.complete(messages)
    data = extract_json(text)
    items = normalize_items(raw_items(data))
    total = compute_total(items)

    if total > budget:
        log.warning("costume_over_budget", total=total, budget=budget)
    log.info("costume_pipeline_complete", items=len(items), total=total)

    return CostumeResponse(items=items, total=total)
