"""Pydantic request models for the screen endpoints.

Each endpoint parses its JSON body through one of these models before any
state is touched, so a malformed body never flips a busy flag or reaches the
store.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from bubbleburst.errors import ValidationError


def _check_score(value: Any) -> Any:
    # bool is an int subclass; a JSON true/false is not a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    # get_json accepts NaN and Infinity literals, which cannot be sent back as JSON
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


Score = Annotated[Union[int, float], BeforeValidator(_check_score)]


class ScreenSubmission(BaseModel):
    """Player data sent to a screen. Extra keys are passed through to the display."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: StrictStr

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must be non-empty")
        return value


class ScoreSubmission(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    user_id: StrictStr = Field(alias="userID")
    score: Score

    @field_validator("user_id")
    @classmethod
    def _user_id_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("userID must be non-empty")
        return value


class ResetRequest(BaseModel):
    """Screens to free, plus an optional (record id, score) pair to finalize."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    screen1: Optional[StrictBool] = None
    screen2: Optional[StrictBool] = None
    record_id: Optional[StrictStr] = Field(default=None, alias="userID")
    score: Optional[Score] = None


def parse(model: type[BaseModel], payload: Any, message: str) -> BaseModel:
    """Validate ``payload`` against ``model`` or raise :class:`ValidationError`."""
    if not isinstance(payload, dict):
        raise ValidationError(message, [{"loc": "body", "msg": "JSON object required"}])
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        details = [
            {"loc": ".".join(str(p) for p in err.get("loc", ())) or "body", "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        raise ValidationError(message, details) from exc
