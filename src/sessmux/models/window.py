"""Window model for sessmux."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .pane import Pane


class Window(BaseModel):
    """A multiplexer window and its panes."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="window_name", description="Window name")
    id: Optional[str] = Field(None, exclude=True, description="Window ID (@window_id) when live")
    panes: List[Pane] = Field(default_factory=list, description="Panes in layout order")
