"""
API Routes untuk data Pickup dan Delivery
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from courier.api.dependencies import get_current_user, get_db, require_admin
from courier.schemas import PickupPayload, DeliveryPayload
from courier.services.query_service import QueryService
from courier.services.record_kinds import PICKUP, DELIVERY
from courier.services.record_service import RecordService

router = APIRouter(prefix="/api", tags=["Records"], dependencies=[Depends(get_current_user)])


# ==================== ALL DATA ====================

@router.get("/data", summary="Get All Pickup and Delivery Data")
def get_all_data(db: Session = Depends(get_db)):
    return RecordService(db).dump()


@router.delete("/data/{awb}", summary="Purge AWB", dependencies=[Depends(require_admin)])
def purge_record(awb: str, db: Session = Depends(get_db)):
    """Hapus AWB dari pickup dan delivery sekaligus"""
    deleted = RecordService(db).purge(awb)
    return {"message": "Record deleted successfully", "deleted": deleted}


# ==================== PICKUP ====================

@router.get("/pickup", summary="List Pickup")
def list_pickup(
    page: int = 1,
    limit: int = 10,
    date: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return QueryService(db).list_records(PICKUP, page=page, page_size=limit, date=date, search=search)


@router.post("/pickup", status_code=201, summary="Add Pickup")
def create_pickup(
    data: PickupPayload,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    record = RecordService(db).create(PICKUP, data.model_dump(by_alias=True), current_user["username"])
    return {"message": "Pickup record added successfully", "data": record}


@router.put("/pickup/{awb}", summary="Update Pickup")
def update_pickup(
    awb: str,
    data: PickupPayload,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    record = RecordService(db).update(PICKUP, awb, data.model_dump(by_alias=True), current_user["username"])
    return {"message": "Pickup record updated successfully", "data": record}


@router.delete("/pickup/{awb}", summary="Delete Pickup", dependencies=[Depends(require_admin)])
def delete_pickup(awb: str, db: Session = Depends(get_db)):
    deleted = RecordService(db).delete(PICKUP, awb)
    return {"message": "Pickup record deleted successfully", "deleted": deleted}


# ==================== DELIVERY ====================

@router.get("/delivery", summary="List Delivery")
def list_delivery(
    page: int = 1,
    limit: int = 10,
    date: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return QueryService(db).list_records(DELIVERY, page=page, page_size=limit, date=date, search=search)


@router.post("/delivery", status_code=201, summary="Add Delivery")
def create_delivery(
    data: DeliveryPayload,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    record = RecordService(db).create(DELIVERY, data.model_dump(by_alias=True), current_user["username"])
    return {"message": "Delivery record added successfully", "data": record}


@router.put("/delivery/{awb}", summary="Update Delivery")
def update_delivery(
    awb: str,
    data: DeliveryPayload,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    record = RecordService(db).update(DELIVERY, awb, data.model_dump(by_alias=True), current_user["username"])
    return {"message": "Delivery record updated successfully", "data": record}


@router.delete("/delivery/{awb}", summary="Delete Delivery", dependencies=[Depends(require_admin)])
def delete_delivery(awb: str, db: Session = Depends(get_db)):
    deleted = RecordService(db).delete(DELIVERY, awb)
    return {"message": "Delivery record deleted successfully", "deleted": deleted}
