"""
Domain-split Pydantic schemas.

The write views (`*Create`, `*Update`) leave out the system-managed fields
(identifier and timestamps); the read views carry them.
"""

from .cemeteries import (
    CemeteryBase,
    CemeteryCreate,
    CemeteryUpdate,
    Cemetery,
    PaginatedCemeteries,
)
from .graves import GraveBase, GraveCreate, GraveUpdate, Grave, PaginatedGraves
from .burials import BurialBase, BurialCreate, BurialUpdate, Burial, PaginatedBurials
from .covers import CoverBase, CoverCreate, CoverUpdate, Cover, PaginatedCovers
from .change_logs import ChangeLog
from .audits import AuditLogBase, AuditLogCreate, AuditLog

__all__ = [
    # Cemeteries
    "CemeteryBase",
    "CemeteryCreate",
    "CemeteryUpdate",
    "Cemetery",
    "PaginatedCemeteries",
    # Graves
    "GraveBase",
    "GraveCreate",
    "GraveUpdate",
    "Grave",
    "PaginatedGraves",
    # Burials
    "BurialBase",
    "BurialCreate",
    "BurialUpdate",
    "Burial",
    "PaginatedBurials",
    # Covers
    "CoverBase",
    "CoverCreate",
    "CoverUpdate",
    "Cover",
    "PaginatedCovers",
    # History
    "ChangeLog",
    "AuditLogBase",
    "AuditLogCreate",
    "AuditLog",
]
