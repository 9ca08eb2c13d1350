"""
API Routes untuk Manual Stats dan Recap
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from courier.api.dependencies import get_current_user, get_db
from courier.schemas import ManualStatsPayload
from courier.services.manual_stats_service import ManualStatsService
from courier.services.query_service import QueryService

router = APIRouter(prefix="/api", tags=["Statistics"], dependencies=[Depends(get_current_user)])


@router.get("/manual-stats", summary="List Manual Stats")
def list_manual_stats(db: Session = Depends(get_db)):
    return ManualStatsService(db).list_stats()


@router.post("/manual-stats", status_code=201, summary="Save Manual Stats")
def save_manual_stats(
    data: ManualStatsPayload,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """Simpan statistik harian; tanggal yang sama akan ditimpa"""
    stats = ManualStatsService(db).upsert(data.model_dump(), current_user["username"])
    return {"message": "Manual stats saved successfully.", "data": stats}


@router.get("/recap", summary="Per-User Recap")
def get_recap(db: Session = Depends(get_db)):
    """Jumlah pickup, delivery sukses/gagal dan total COD per user"""
    return QueryService(db).get_recap()
