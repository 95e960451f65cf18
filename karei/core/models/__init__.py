"""
Domain models — Pydantic types shared by the core.

    from karei.core.models import ManagerStatus
"""

from karei.core.models.status import ManagerStatus

__all__ = [
    "ManagerStatus",
]
