"""
Record kinds: the fixed field sets of pickup and delivery rows.

Each kind knows its spreadsheet sheet, its headers, how to normalise a raw
header -> value mapping, how to validate it, how to upsert it into its table
and how to render a stored record back into a row.
"""
import math
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import String, cast
from sqlalchemy.orm import Session

from courier.database import upsert_row
from courier.errors import ValidationError
from courier.models import Pickup, Delivery, DELIVERY_STATUSES

AWB = "AWB"
TANGGAL = "Tanggal"
USER = "User"


def clean_text(value: Any) -> Optional[str]:
    """Render a cell/JSON value as trimmed text, None when blank"""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            # Excel stores numeric ids (AWB, phone) as floats
            value = int(value)
    text = str(value).strip()
    return text or None


def clean_date(value: Any) -> Optional[str]:
    """Date cells become YYYY-MM-DD, strings are kept literally"""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    return clean_text(value)


class RecordKind:
    """Base variant; subclasses declare their table and headers"""

    name: str = ""
    sheet_name: str = ""
    model = None
    # header -> model attribute
    columns: Dict[str, str] = {}

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(self.columns)

    def normalize(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        row = {}
        for header in self.columns:
            value = raw.get(header)
            if header == TANGGAL:
                row[header] = clean_date(value)
            else:
                row[header] = self.normalize_field(header, value)
        return row

    def normalize_field(self, header: str, value: Any) -> Any:
        return clean_text(value)

    def validate(self, row: Mapping[str, Any]) -> None:
        """Field constraints of the kind; raises ValidationError"""

    def _attributes(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        return {attr: row.get(header) for header, attr in self.columns.items()}

    def build(self, row: Mapping[str, Any]):
        return self.model(**self._attributes(row))

    def apply(self, record, row: Mapping[str, Any]) -> None:
        """Overwrite every non-key field of ``record`` from ``row``"""
        for header, attr in self.columns.items():
            if header == AWB:
                continue
            setattr(record, attr, row.get(header))

    def upsert(self, db: Session, row: Mapping[str, Any]) -> None:
        """Insert or fully overwrite by AWB in one statement. Does not commit."""
        upsert_row(db, self.model, self._attributes(row), key="awb")

    def get(self, db: Session, awb: str):
        return db.get(self.model, awb)

    def to_row(self, record) -> Dict[str, Any]:
        return record.to_dict()

    def key_column(self):
        return self.model.awb

    def date_column(self):
        return self.model.tanggal

    def search_columns(self) -> List:
        return [getattr(self.model, attr) for attr in self.columns.values()]


class PickupKind(RecordKind):
    name = "pickup"
    sheet_name = "Pickup"
    model = Pickup
    columns = {
        "AWB": "awb",
        "Nama": "nama",
        "Alamat": "alamat",
        "No. HP": "no_hp",
        "Tanggal": "tanggal",
        "User": "user",
    }


class DeliveryKind(RecordKind):
    name = "delivery"
    sheet_name = "Delivery"
    model = Delivery
    columns = {
        "AWB": "awb",
        "Status": "status",
        "Tanggal": "tanggal",
        "User": "user",
        "COD Amount": "cod_amount",
    }

    def normalize_field(self, header: str, value: Any) -> Any:
        if header == "Status":
            text = clean_text(value)
            if text is None:
                return None
            for status in DELIVERY_STATUSES:
                if status.lower() == text.lower():
                    return status
            return text
        if header == "COD Amount":
            return self._normalize_amount(value)
        return clean_text(value)

    @staticmethod
    def _normalize_amount(value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return 0.0 if isinstance(value, float) and math.isnan(value) else float(value)
        text = clean_text(value)
        if text is None:
            return 0.0
        try:
            return float(text.replace(",", ""))
        except ValueError:
            return text

    def validate(self, row: Mapping[str, Any]) -> None:
        status = row.get("Status")
        if status is not None and status not in DELIVERY_STATUSES:
            raise ValidationError(
                f"Invalid Status '{status}'. Allowed: {', '.join(DELIVERY_STATUSES)}."
            )
        amount = row.get("COD Amount")
        if not isinstance(amount, float):
            raise ValidationError(f"COD Amount must be a number, got '{amount}'.")
        if amount < 0:
            raise ValidationError("COD Amount must not be negative.")

    def search_columns(self) -> List:
        return [
            cast(self.model.cod_amount, String) if attr == "cod_amount" else getattr(self.model, attr)
            for attr in self.columns.values()
        ]


PICKUP = PickupKind()
DELIVERY = DeliveryKind()

RECORD_KINDS: Dict[str, RecordKind] = {
    PICKUP.name: PICKUP,
    DELIVERY.name: DELIVERY,
}
