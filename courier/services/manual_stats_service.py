"""
Service untuk statistik harian yang diinput manual
"""
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from courier.database import upsert_row
from courier.errors import StorageError, ValidationError
from courier.models import ManualStats
from courier.services.record_kinds import clean_date, clean_text

logger = logging.getLogger(__name__)

COUNTER_FIELDS = (
    "delivery_success",
    "delivery_pending",
    "pickup_success",
    "pickup_failed",
    "cod_packages_count",
)


class ManualStatsService:
    """Upsert-by-date daily counters"""

    def __init__(self, db: Session):
        self.db = db

    def list_stats(self) -> List[Dict[str, Any]]:
        rows = self.db.query(ManualStats).order_by(ManualStats.date.desc()).all()
        return [r.to_dict() for r in rows]

    def upsert(self, payload: Mapping[str, Any], username: str) -> Dict[str, Any]:
        """Simpan statistik; tanggal yang sudah ada diganti seluruhnya"""
        stats_date = clean_date(payload.get("date"))
        submitted_by = clean_text(payload.get("submitted_by")) or username
        if not stats_date or not submitted_by:
            raise ValidationError("Date and User are required.")

        counters = {}
        for field in COUNTER_FIELDS:
            value = payload.get(field) or 0
            if value < 0:
                raise ValidationError(f"{field} must not be negative.")
            counters[field] = int(value)

        values = {"date": stats_date, **counters, "submitted_by": submitted_by}
        try:
            upsert_row(self.db, ManualStats, values, key="date")
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("[ManualStats] Save for %s failed: %s", stats_date, e)
            raise StorageError("Failed to save manual stats.", details=str(getattr(e, "orig", e)))

        row = self.db.query(ManualStats).filter(ManualStats.date == stats_date).one()
        return row.to_dict()
