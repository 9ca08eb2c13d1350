"""
Service untuk CRUD single record pickup/delivery
"""
import logging
from typing import Any, Dict, Mapping

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from courier.errors import ConflictError, NotFoundError, StorageError, ValidationError
from courier.services.record_kinds import (
    AWB, TANGGAL, USER, RecordKind, PICKUP, DELIVERY, RECORD_KINDS,
)

logger = logging.getLogger(__name__)


class RecordService:
    """Single-row operations on the pickup and delivery tables"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Failed to {action}: record already exists.", details=str(e.orig))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("[Records] %s failed: %s", action, e)
            raise StorageError(f"Failed to {action}.", details=str(getattr(e, "orig", e)))

    def _prepare(self, kind: RecordKind, payload: Mapping[str, Any], username: str,
                 require_awb: bool = False) -> Dict[str, Any]:
        row = kind.normalize(payload)
        if not row[TANGGAL] or (require_awb and not row[AWB]):
            raise ValidationError("AWB and Tanggal are required fields.")
        kind.validate(row)
        row[USER] = username
        return row

    def create(self, kind: RecordKind, payload: Mapping[str, Any], username: str) -> Dict[str, Any]:
        """Insert a new record; the AWB must not exist yet"""
        row = self._prepare(kind, payload, username, require_awb=True)

        if kind.get(self.db, row[AWB]) is not None:
            raise ConflictError(f"{kind.sheet_name} record with AWB {row[AWB]} already exists.")

        record = kind.build(row)
        self.db.add(record)
        self._commit(f"add {kind.name} record")
        return kind.to_row(record)

    def update(self, kind: RecordKind, awb: str, payload: Mapping[str, Any], username: str) -> Dict[str, Any]:
        """Full overwrite of every field except the AWB"""
        record = kind.get(self.db, awb)
        if record is None:
            raise NotFoundError(f"{kind.sheet_name} record {awb} not found.")

        row = self._prepare(kind, payload, username)
        kind.apply(record, row)
        self._commit(f"update {kind.name} record")
        return kind.to_row(record)

    def delete(self, kind: RecordKind, awb: str) -> int:
        """Delete from one table only; missing rows are not an error"""
        deleted = self.db.query(kind.model).filter(kind.key_column() == awb).delete(synchronize_session=False)
        self._commit(f"delete {kind.name} record")
        return deleted

    def purge(self, awb: str) -> Dict[str, int]:
        """Hapus AWB dari tabel pickup dan delivery dalam satu transaksi"""
        counts = {}
        try:
            for kind in (PICKUP, DELIVERY):
                counts[kind.name] = (
                    self.db.query(kind.model)
                    .filter(kind.key_column() == awb)
                    .delete(synchronize_session=False)
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("[Records] Purge of %s failed: %s", awb, e)
            raise StorageError("Error deleting record.", details=str(getattr(e, "orig", e)))

        logger.info("[Records] Purged %s (pickup=%d, delivery=%d)", awb, counts["pickup"], counts["delivery"])
        return counts

    def dump(self) -> Dict[str, Any]:
        """Semua data pickup dan delivery"""
        return {
            f"{name}Data": [
                kind.to_row(r)
                for r in self.db.query(kind.model).order_by(kind.key_column()).all()
            ]
            for name, kind in RECORD_KINDS.items()
        }
