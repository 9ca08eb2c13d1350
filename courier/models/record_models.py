"""
SQLAlchemy models untuk pickup, delivery dan manual_stats

Column names follow the spreadsheet headers literally ("No. HP",
"COD Amount"), so the same names travel from the upload through the
database to the JSON responses.
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime

from courier.database import Base

STATUS_DELIVERED = "Terkirim"
STATUS_FAILED = "Gagal"
STATUS_IN_PROGRESS = "Proses"
DELIVERY_STATUSES = (STATUS_DELIVERED, STATUS_FAILED, STATUS_IN_PROGRESS)


class Pickup(Base):
    """Model untuk tabel pickup, keyed by AWB"""
    __tablename__ = "pickup"

    awb = Column("AWB", String(64), primary_key=True)
    nama = Column("Nama", String(255), nullable=True)
    alamat = Column("Alamat", String(500), nullable=True)
    no_hp = Column("No. HP", String(32), nullable=True)
    tanggal = Column("Tanggal", String(32), nullable=True, index=True)
    user = Column("User", String(50), nullable=True, index=True)

    def to_dict(self):
        return {
            "AWB": self.awb,
            "Nama": self.nama,
            "Alamat": self.alamat,
            "No. HP": self.no_hp,
            "Tanggal": self.tanggal,
            "User": self.user,
        }


class Delivery(Base):
    """Model untuk tabel delivery, keyed by AWB"""
    __tablename__ = "delivery"

    awb = Column("AWB", String(64), primary_key=True)
    status = Column("Status", String(16), nullable=True)
    tanggal = Column("Tanggal", String(32), nullable=True, index=True)
    user = Column("User", String(50), nullable=True, index=True)
    cod_amount = Column("COD Amount", Float, nullable=False, default=0.0)

    def to_dict(self):
        return {
            "AWB": self.awb,
            "Status": self.status,
            "Tanggal": self.tanggal,
            "User": self.user,
            "COD Amount": self.cod_amount,
        }


class ManualStats(Base):
    """Statistik harian yang diinput manual, satu baris per tanggal"""
    __tablename__ = "manual_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String(32), unique=True, nullable=False)
    delivery_success = Column(Integer, nullable=False, default=0)
    delivery_pending = Column(Integer, nullable=False, default=0)
    pickup_success = Column(Integer, nullable=False, default=0)
    pickup_failed = Column(Integer, nullable=False, default=0)
    cod_packages_count = Column(Integer, nullable=False, default=0)
    submitted_by = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date,
            "delivery_success": self.delivery_success,
            "delivery_pending": self.delivery_pending,
            "pickup_success": self.pickup_success,
            "pickup_failed": self.pickup_failed,
            "cod_packages_count": self.cod_packages_count,
            "submitted_by": self.submitted_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
