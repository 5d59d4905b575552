"""Application services - Orchestration of locking, validation and persistence."""

from point_ledger.application.services.point_service import PointService, ReconciliationReport

__all__ = [
    "PointService",
    "ReconciliationReport",
]
