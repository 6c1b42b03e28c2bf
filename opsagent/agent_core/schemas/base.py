"""Pydantic base schema utilities for agent core models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base Pydantic model for all domain schemas.

    Configures common Pydantic behaviors:
    - ``populate_by_name=True``: Allow initialization by alias or field name.
    - ``extra="forbid"``: Reject unknown fields so planner output cannot smuggle extra keys into a step.
    - ``use_enum_values=False``: Keep enum members on the model; JSON dumps still emit the raw values.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        use_enum_values=False,
    )
