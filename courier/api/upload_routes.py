"""
API Routes untuk Upload File
"""
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from courier.api.dependencies import get_app_settings, get_current_user, get_db
from courier.config import Settings
from courier.services.upload_service import UploadService

router = APIRouter(prefix="/api", tags=["Upload"])


@router.post("/upload", summary="Upload Workbook")
def upload_file(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(get_current_user),
):
    """
    Upload file Excel berisi sheet **Pickup** dan **Delivery**.

    Semua baris disimpan dalam satu transaksi; kalau satu baris gagal,
    tidak ada data yang tersimpan.
    """
    # One byte past the limit is enough to reject an oversized file
    content = file.file.read(settings.max_upload_bytes + 1)
    service = UploadService(db, max_upload_bytes=settings.max_upload_bytes)
    return service.ingest(content, acting_user=current_user["username"])
