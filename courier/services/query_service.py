"""
Query Service - filtered/paginated listing dan recap per user
"""
import math
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, case
from sqlalchemy.orm import Session

from courier.errors import ValidationError
from courier.models import Pickup, Delivery, STATUS_DELIVERED, STATUS_FAILED
from courier.services.record_kinds import RecordKind


class QueryService:
    """Read-side views over the record tables"""

    def __init__(self, db: Session):
        self.db = db

    def list_records(
        self,
        kind: RecordKind,
        page: int = 1,
        page_size: int = 10,
        date: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        One page of records of ``kind``.

        ``date`` is an exact match on Tanggal; ``search`` is a
        case-insensitive substring match over every column of the kind.
        ``totalPages`` is computed from the filtered count.
        """
        if page < 1:
            raise ValidationError("page must be at least 1.")
        if page_size <= 0:
            raise ValidationError("limit must be greater than 0.")

        query = self.db.query(kind.model)

        date = (date or "").strip()
        if date:
            query = query.filter(kind.date_column() == date)

        term = (search or "").strip().lower()
        if term:
            query = query.filter(or_(*[
                func.lower(column).contains(term, autoescape=True)
                for column in kind.search_columns()
            ]))

        total = query.count()
        rows = (
            query.order_by(kind.date_column().desc(), kind.key_column().asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

        return {
            "data": [kind.to_row(r) for r in rows],
            "page": page,
            "limit": page_size,
            "total": total,
            "totalPages": math.ceil(total / page_size),
        }

    def get_recap(self) -> List[Dict[str, Any]]:
        """Aggregate pickup/delivery per user (outer join on username)"""
        pickups = (
            self.db.query(Pickup.user, func.count(Pickup.awb).label("pickup_count"))
            .filter(Pickup.user.isnot(None))
            .group_by(Pickup.user)
            .all()
        )
        deliveries = (
            self.db.query(
                Delivery.user,
                func.sum(case((Delivery.status == STATUS_DELIVERED, 1), else_=0)).label("success"),
                func.sum(case((Delivery.status == STATUS_FAILED, 1), else_=0)).label("failed"),
                func.sum(Delivery.cod_amount).label("total_cod"),
            )
            .filter(Delivery.user.isnot(None))
            .group_by(Delivery.user)
            .all()
        )

        recap: Dict[str, Dict[str, Any]] = {}

        def _entry(username: str) -> Dict[str, Any]:
            return recap.setdefault(username, {
                "username": username,
                "pickup_count": 0,
                "delivery_success_count": 0,
                "delivery_failed_count": 0,
                "total_cod": 0,
            })

        for r in pickups:
            _entry(r.user)["pickup_count"] = r.pickup_count or 0

        for r in deliveries:
            entry = _entry(r.user)
            entry["delivery_success_count"] = int(r.success or 0)
            entry["delivery_failed_count"] = int(r.failed or 0)
            entry["total_cod"] = r.total_cod or 0

        return [recap[name] for name in sorted(recap)]
