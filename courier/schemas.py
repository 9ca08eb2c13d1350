"""
Pydantic Schemas untuk request body

Record payloads use the literal column headers as JSON keys
("AWB", "No. HP", "COD Amount").
"""
from typing import Optional

from pydantic import BaseModel, Field


# === Auth Schemas ===

class UserRegister(BaseModel):
    """Empty values are rejected by the auth service with a 400"""
    username: str = ""
    password: str = ""


class UserLogin(BaseModel):
    username: str = ""
    password: str = ""


class RoleUpdate(BaseModel):
    role: str = Field(..., description="admin atau user")


# === Record Schemas ===

class PickupPayload(BaseModel):
    """Body untuk create/update pickup"""
    awb: Optional[str] = Field(None, alias="AWB")
    nama: Optional[str] = Field(None, alias="Nama")
    alamat: Optional[str] = Field(None, alias="Alamat")
    no_hp: Optional[str] = Field(None, alias="No. HP")
    tanggal: Optional[str] = Field(None, alias="Tanggal")

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True
        json_schema_extra = {
            "example": {
                "AWB": "JKT001",
                "Nama": "Budi Santoso",
                "Alamat": "Jl. Merdeka No. 1, Jakarta",
                "No. HP": "081234567890",
                "Tanggal": "2024-07-20",
            }
        }


class DeliveryPayload(BaseModel):
    """Body untuk create/update delivery"""
    awb: Optional[str] = Field(None, alias="AWB")
    status: Optional[str] = Field(None, alias="Status")
    tanggal: Optional[str] = Field(None, alias="Tanggal")
    cod_amount: Optional[float] = Field(None, alias="COD Amount", ge=0)

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True
        json_schema_extra = {
            "example": {
                "AWB": "JKT001",
                "Status": "Terkirim",
                "Tanggal": "2024-07-21",
                "COD Amount": 50000,
            }
        }


# === Manual Stats Schemas ===

class ManualStatsPayload(BaseModel):
    date: Optional[str] = None
    delivery_success: Optional[int] = Field(0, ge=0)
    delivery_pending: Optional[int] = Field(0, ge=0)
    pickup_success: Optional[int] = Field(0, ge=0)
    pickup_failed: Optional[int] = Field(0, ge=0)
    cod_packages_count: Optional[int] = Field(0, ge=0)
    submitted_by: Optional[str] = None
