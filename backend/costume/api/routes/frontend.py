"""Server-rendered costume front-end.

Routes:
    GET  /                    input view
    POST /costume             generate from the input form
    POST /costume/regenerate  rerun with a cheaper/better budget
    POST /costume/clear       back to the input view ("New costume")

The current view state travels in a hidden ``state`` field. A failed
generation re-renders the previous state with an error notice.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from costume.errors import CostumeError
from costume.models.contracts import CostumeRequest, CostumeResponse
from costume.pipeline.generate import generate_costume
from costume.pipeline.model_client import ChatCompletionClient, get_model_client
from costume.presentation.layout import (
    BUDGET_STEP,
    DEFAULT_FORM_BUDGET,
    MAX_BUDGET,
    MIN_BUDGET,
    group_by_wear_position,
    regenerate_budget,
)
from costume.presentation.state import (
    Cleared,
    GenerationSucceeded,
    Idle,
    Showing,
    dump_state,
    load_state,
    transition,
)

logger = structlog.get_logger()

router = APIRouter(tags=["frontend"])

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"

EMPTY_DESCRIPTION_NOTICE = "Please describe your costume idea"
GENERATE_FAILED_NOTICE = "Failed to generate costume. Please try again."
REGENERATE_FAILED_NOTICE = "Failed to regenerate. Please try again."
LOST_STATE_NOTICE = "Your costume could not be restored. Please start a new one."


def _money(value: float | int | None) -> str:
    """Jinja filter: format a dollar amount as $1,234.50."""
    try:
        return f"${float(value or 0):,.2f}"
    except (TypeError, ValueError):
        return "$0.00"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = _money


def _render(
    request: Request,
    state: Idle | Showing,
    *,
    notice: str | None = None,
    notice_kind: Literal["success", "error"] = "error",
    description: str = "",
    budget: float = DEFAULT_FORM_BUDGET,
) -> HTMLResponse:
    context = {
        "state": state,
        "state_json": dump_state(state),
        "rows": group_by_wear_position(state.items) if isinstance(state, Showing) else [],
        "notice": notice,
        "notice_kind": notice_kind,
        "description": description,
        "budget": int(budget),
        "min_budget": int(MIN_BUDGET),
        "max_budget": int(MAX_BUDGET),
        "budget_step": BUDGET_STEP,
    }
    return templates.TemplateResponse(request, "index.html", context)


async def _run_pipeline(
    client: ChatCompletionClient,
    description: str,
    budget: float,
    quality: Literal["cheaper", "better", "normal"] | None = None,
) -> CostumeResponse | None:
    """Run the costume pipeline; None when it fails (already logged)."""
    try:
        return await generate_costume(
            CostumeRequest(description=description, budget=budget, quality=quality),
            client,
        )
    except CostumeError as exc:
        logger.warning(
            "frontend_generation_failed",
            error_type=type(exc).__name__,
            status=exc.status_code,
        )
        return None


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    return _render(request, Idle())


@router.post("/costume", response_class=HTMLResponse)
async def generate(
    request: Request,
    description: str = Form(""),
    budget: float = Form(DEFAULT_FORM_BUDGET),
    client: ChatCompletionClient = Depends(get_model_client),
) -> HTMLResponse:
    budget = min(MAX_BUDGET, max(MIN_BUDGET, budget))
    if not description.strip():
        return _render(request, Idle(), notice=EMPTY_DESCRIPTION_NOTICE, budget=budget)

    result = await _run_pipeline(client, description.strip(), budget)
    if result is None:
        return _render(
            request,
            Idle(),
            notice=GENERATE_FAILED_NOTICE,
            description=description,
            budget=budget,
        )

    state = transition(
        Idle(),
        GenerationSucceeded(
            description=description.strip(),
            budget=budget,
            items=result.items,
            total=result.total,
        ),
    )
    return _render(
        request,
        state,
        notice="Costume generated! Check out your items below",
        notice_kind="success",
    )


@router.post("/costume/regenerate", response_class=HTMLResponse)
async def regenerate(
    request: Request,
    direction: Literal["cheaper", "better"] = Form(...),
    state: str = Form(""),
    client: ChatCompletionClient = Depends(get_model_client),
) -> HTMLResponse:
    current = load_state(state)
    if not isinstance(current, Showing):
        return _render(request, Idle(), notice=LOST_STATE_NOTICE)

    new_budget = regenerate_budget(current.budget, direction)
    result = await _run_pipeline(client, current.description, new_budget, quality=direction)
    if result is None:
        return _render(request, current, notice=REGENERATE_FAILED_NOTICE)

    # The original budget is kept so repeated clicks don't compound.
    updated = transition(
        current,
        GenerationSucceeded(
            description=current.description,
            budget=current.budget,
            items=result.items,
            total=result.total,
        ),
    )
    label = "cheaper" if direction == "cheaper" else "better quality"
    return _render(
        request,
        updated,
        notice=f"Regenerated with {label} items!",
        notice_kind="success",
    )


@router.post("/costume/clear", response_class=HTMLResponse)
async def clear(request: Request, state: str = Form("")) -> HTMLResponse:
    current = load_state(state) or Idle()
    return _render(request, transition(current, Cleared()))
