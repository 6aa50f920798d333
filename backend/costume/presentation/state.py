"""Two-state view machine for the costume front-end.

``Idle`` shows the input form, ``Showing`` shows a generated costume. A
successful generation moves to (or replaces) ``Showing``; ``Cleared`` goes
back to ``Idle``. Failures are not events: the current state stays as it is
and only a notification is shown.

The state round-trips through the HTML form as JSON, so the server keeps
nothing between requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from costume.models.contracts import CostumeItem


class Idle(BaseModel):
    kind: Literal["idle"] = "idle"


class Showing(BaseModel):
    kind: Literal["showing"] = "showing"
    description: str
    budget: float = Field(gt=0)
    items: list[CostumeItem] = []
    total: float = Field(ge=0, default=0.0)

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value.strip()


ViewState = Annotated[Idle | Showing, Field(discriminator="kind")]

_state_adapter: TypeAdapter[Idle | Showing] = TypeAdapter(ViewState)


@dataclass(frozen=True)
class GenerationSucceeded:
    description: str
    budget: float
    items: list[CostumeItem]
    total: float


@dataclass(frozen=True)
class Cleared:
    pass


Event = GenerationSucceeded | Cleared


def transition(state: Idle | Showing, event: Event) -> Idle | Showing:
    if isinstance(event, Cleared):
        return Idle()
    if isinstance(event, GenerationSucceeded):
        return Showing(
            description=event.description,
            budget=event.budget,
            items=list(event.items),
            total=event.total,
        )
    raise TypeError(f"Unknown view event: {type(event).__name__}")


def dump_state(state: Idle | Showing) -> str:
    """Serialize a state for the hidden form field."""
    return state.model_dump_json(by_alias=True)


def load_state(raw: str | None) -> Idle | Showing | None:
    """Parse a state posted back by the browser; None if missing or invalid."""
    if not raw:
        return None
    try:
        return _state_adapter.validate_json(raw)
    except ValidationError:
        return None
