from typing import Optional
from fastapi import Depends, Query
from sqlalchemy.orm import Session

from EventHub.database import get_db, ServiceTypeEnum
from EventHub.routers.base import api_router
from EventHub.routers.auth import get_current_user, require_roles
from EventHub.schemas.common import ApiResponse, PaginatedResponse
from EventHub.schemas.vendor import VendorCreate, VendorUpdate, ServiceCreate, ServiceUpdate, ReviewCreate
from EventHub.services.vendor_service import VendorService

catalog_editor = require_roles("vendor", "admin")


@api_router.get("/vendors", response_model=PaginatedResponse)
def list_vendors(
    service_type: Optional[ServiceTypeEnum] = None,
    is_verified: Optional[bool] = None,
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    vendors, pagination = VendorService(db).list_vendors(
        service_type=service_type,
        is_verified=is_verified,
        min_rating=min_rating,
        search=search,
        page=page,
        limit=limit,
    )
    return PaginatedResponse(success=True, count=len(vendors), pagination=pagination, data=vendors)


@api_router.post("/vendors", response_model=ApiResponse, status_code=201)
def create_vendor(
    vendor: VendorCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = VendorService(db).create_vendor(vendor, current_user)
    return ApiResponse(success=True, message="Vendor profile created successfully.", data=result)


@api_router.get("/vendors/{vendor_id}", response_model=ApiResponse)
def get_vendor(vendor_id: str, db: Session = Depends(get_db)):
    return ApiResponse(success=True, data=VendorService(db).get_vendor(vendor_id))


@api_router.put("/vendors/{vendor_id}", response_model=ApiResponse)
def update_vendor(
    vendor_id: str,
    update: VendorUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = VendorService(db).update_vendor(vendor_id, update, current_user)
    return ApiResponse(success=True, message="Vendor profile updated successfully.", data=result)


@api_router.delete("/vendors/{vendor_id}", response_model=ApiResponse)
def delete_vendor(
    vendor_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    VendorService(db).delete_vendor(vendor_id, current_user)
    return ApiResponse(success=True, message="Vendor profile deleted successfully.", data={})


@api_router.post("/vendors/{vendor_id}/services", response_model=ApiResponse, status_code=201)
def add_vendor_service(
    vendor_id: str,
    service: ServiceCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(catalog_editor)
):
    result = VendorService(db).add_service(vendor_id, service, current_user)
    return ApiResponse(success=True, message="Service added successfully.", data=result)


@api_router.put("/vendors/{vendor_id}/services/{service_id}", response_model=ApiResponse)
def update_vendor_service(
    vendor_id: str,
    service_id: str,
    service: ServiceUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(catalog_editor)
):
    result = VendorService(db).update_service(vendor_id, service_id, service, current_user)
    return ApiResponse(success=True, message="Service updated successfully.", data=result)


@api_router.delete("/vendors/{vendor_id}/services/{service_id}", response_model=ApiResponse)
def delete_vendor_service(
    vendor_id: str,
    service_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(catalog_editor)
):
    result = VendorService(db).delete_service(vendor_id, service_id, current_user)
    return ApiResponse(success=True, message="Service removed successfully.", data=result)


@api_router.post("/vendors/{vendor_id}/reviews", response_model=ApiResponse, status_code=201)
def add_vendor_review(
    vendor_id: str,
    review: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = VendorService(db).add_review(vendor_id, review, current_user)
    return ApiResponse(success=True, message="Review added successfully.", data=result)
