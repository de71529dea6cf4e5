"""Pane model for sessmux."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Pane(BaseModel):
    """A multiplexer pane."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="pane_id", description="Pane ID (%pane_id) when live")
    path: str = Field(..., description="Working directory")
