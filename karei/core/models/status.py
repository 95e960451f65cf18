"""
ManagerStatus — read-only snapshot of one domain's selection.
"""

from __future__ import annotations

from pydantic import BaseModel


class ManagerStatus(BaseModel):
    """What a StateManager reports for display."""

    type: str
    current: str
    available: list[str]
    config: str

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return self.model_dump(mode="json")
