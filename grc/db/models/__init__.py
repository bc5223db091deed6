"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes of the grave registry.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .cemeteries import Cemetery
from .graves import Grave, grave_covers
from .burials import Burial
from .covers import Cover
from .change_logs import ChangeLog
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # registry
    "Cemetery",
    "Grave",
    "grave_covers",
    "Burial",
    "Cover",
    # history
    "ChangeLog",
    "AuditLog",
]
