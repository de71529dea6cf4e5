"""Session model and snapshot format for sessmux."""
import json
from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import SnapshotError
from .window import Window


class Session(BaseModel):
    """A multiplexer session."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="session_name", description="Session name")
    windows: List[Window] = Field(default_factory=list, description="Windows in index order")


Snapshot = List[Session]

_snapshot_adapter = TypeAdapter(Snapshot)


def load_snapshot(text: str) -> Snapshot:
    """Parse a snapshot file.

    Raises:
        SnapshotError: If the text is not a valid snapshot
    """
    if not text.strip():
        return []
    try:
        return _snapshot_adapter.validate_json(text)
    except ValidationError as e:
        raise SnapshotError(f"Invalid session snapshot: {e}")


def dump_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot using the on-disk key names."""
    data = _snapshot_adapter.dump_python(snapshot, by_alias=True)
    return json.dumps(data, indent=2) + "\n"
