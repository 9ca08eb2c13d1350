"""
Service untuk upload dan proses file Excel (sheet Pickup dan Delivery)
"""
import io
import logging
from typing import Any, Dict, List, Optional

import pandas as pd
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from courier.errors import FormatError, StorageError, ValidationError
from courier.services.record_kinds import AWB, USER, RecordKind, PICKUP, DELIVERY

logger = logging.getLogger(__name__)

# Header row is spreadsheet row 1
FIRST_DATA_ROW = 2


class UploadService:
    """Service untuk handle upload workbook pickup/delivery"""

    KINDS = (PICKUP, DELIVERY)

    def __init__(self, db: Session, max_upload_bytes: Optional[int] = None):
        self.db = db
        self.max_upload_bytes = max_upload_bytes

    def parse_workbook(self, file_content: bytes) -> pd.ExcelFile:
        """Open the workbook; any parser failure is a FormatError"""
        try:
            return pd.ExcelFile(io.BytesIO(file_content))
        except Exception as e:
            raise FormatError("Invalid file: not a readable Excel workbook.", details=str(e))

    def check_sheets(self, workbook: pd.ExcelFile) -> None:
        missing = [kind.sheet_name for kind in self.KINDS if kind.sheet_name not in workbook.sheet_names]
        if missing:
            raise ValidationError(
                'Invalid Excel file: missing required sheet '
                + ", ".join(f'"{name}"' for name in missing)
                + '. It must contain both "Pickup" and "Delivery" sheets.'
            )

    def sheet_rows(self, workbook: pd.ExcelFile, sheet_name: str) -> List[Dict[str, Any]]:
        """Sheet as ordered header -> value mappings, blank cells as None"""
        try:
            df = workbook.parse(sheet_name, dtype=object)
        except Exception as e:
            raise FormatError(f'Error reading data from sheet "{sheet_name}".', details=str(e))

        df.columns = [str(col).strip() for col in df.columns]
        df = df.astype(object).where(pd.notna(df), None)
        return df.to_dict(orient="records")

    def prepare_rows(self, kind: RecordKind, raw_rows: List[Dict[str, Any]], acting_user: str) -> Dict[str, Any]:
        """
        Normalise and validate one sheet; rows without AWB are skipped.
        A repeated AWB keeps the values of its last row.
        """
        rows: Dict[str, Dict[str, Any]] = {}
        skipped = 0
        for idx, raw in enumerate(raw_rows):
            row = kind.normalize(raw)
            if not row[AWB]:
                skipped += 1
                continue
            if not row[USER]:
                row[USER] = acting_user
            try:
                kind.validate(row)
            except ValidationError as e:
                raise ValidationError(
                    f'Sheet "{kind.sheet_name}" row {idx + FIRST_DATA_ROW}: {e.message}'
                )
            rows[row[AWB]] = row
        return {"rows": list(rows.values()), "skipped": skipped}

    def ingest(self, file_content: bytes, acting_user: str) -> Dict[str, Any]:
        """
        Parse, validate and upsert a whole workbook.

        All rows of both sheets are written in one transaction; nothing is
        persisted unless every row is.
        """
        if not file_content:
            raise ValidationError("No file uploaded.")
        if self.max_upload_bytes and len(file_content) > self.max_upload_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_upload_bytes // (1024 * 1024)}MB."
            )

        with self.parse_workbook(file_content) as workbook:
            self.check_sheets(workbook)
            prepared = {
                kind.name: self.prepare_rows(kind, self.sheet_rows(workbook, kind.sheet_name), acting_user)
                for kind in self.KINDS
            }

        logger.info(
            "[Upload] %s uploading %d pickup / %d delivery rows",
            acting_user, len(prepared["pickup"]["rows"]), len(prepared["delivery"]["rows"]),
        )

        try:
            for kind in self.KINDS:
                for row in prepared[kind.name]["rows"]:
                    kind.upsert(self.db, row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            reason = str(getattr(e, "orig", None) or e)
            logger.error("[Upload] Rolled back upload by %s: %s", acting_user, reason)
            raise StorageError(
                "Data conflict or constraint violation. No rows were saved.", details=reason
            )

        summary = {
            name: {"upserted": len(result["rows"]), "skipped": result["skipped"]}
            for name, result in prepared.items()
        }
        logger.info("[Upload] Committed upload by %s: %s", acting_user, summary)
        return {"message": "File processed and data saved successfully", **summary}
