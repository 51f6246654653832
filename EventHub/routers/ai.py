from typing import Optional
from fastapi import Depends, Query
from sqlalchemy.orm import Session

from EventHub.completion import CompletionClient, get_completion_client
from EventHub.database import get_db
from EventHub.routers.base import api_router
from EventHub.routers.auth import get_current_user, require_roles
from EventHub.schemas.common import ApiResponse
from EventHub.schemas.recommendation import (
    VendorRecommendationCriteria, BudgetCriteria, PricingCriteria, SocialMediaRequest
)
from EventHub.services.recommendation_service import RecommendationService


@api_router.get("/ai/recommendations/vendors", response_model=ApiResponse)
def vendor_recommendations(
    event_type: Optional[str] = Query(None, alias="eventType"),
    budget: Optional[float] = Query(None, ge=0),
    location: Optional[str] = None,
    guest_count: Optional[int] = Query(None, alias="guestCount", ge=0),
    preferences: Optional[str] = None,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
    current_user: dict = Depends(get_current_user)
):
    criteria = VendorRecommendationCriteria(
        event_type=event_type, budget=budget, location=location, guest_count=guest_count, preferences=preferences
    )
    result = RecommendationService(db, client).vendor_recommendations(criteria, current_user["user_id"])
    return ApiResponse(success=True, data=result)


@api_router.get("/ai/recommendations/budget", response_model=ApiResponse)
def budget_recommendations(
    event_type: Optional[str] = Query(None, alias="eventType"),
    total_budget: Optional[float] = Query(None, alias="totalBudget", ge=0),
    guest_count: Optional[int] = Query(None, alias="guestCount", ge=0),
    location: Optional[str] = None,
    preferences: Optional[str] = None,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
    current_user: dict = Depends(get_current_user)
):
    criteria = BudgetCriteria(
        event_type=event_type, total_budget=total_budget, guest_count=guest_count,
        location=location, preferences=preferences
    )
    result = RecommendationService(db, client).budget_recommendations(criteria)
    return ApiResponse(success=True, data=result)


@api_router.get("/ai/pricing-suggestions", response_model=ApiResponse)
def pricing_suggestions(
    service_type: Optional[str] = Query(None, alias="serviceType"),
    service_name: Optional[str] = Query(None, alias="serviceName"),
    current_price: Optional[float] = Query(None, alias="currentPrice", ge=0),
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
    current_user: dict = Depends(require_roles("vendor", "admin"))
):
    criteria = PricingCriteria(service_type=service_type, service_name=service_name, current_price=current_price)
    result = RecommendationService(db, client).pricing_suggestions(criteria, current_user["user_id"])
    return ApiResponse(success=True, data=result)


@api_router.post("/ai/social-media", response_model=ApiResponse)
def social_media_post(
    request: SocialMediaRequest,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
    current_user: dict = Depends(get_current_user)
):
    result = RecommendationService(db, client).social_media_post(request, current_user["user_id"])
    return ApiResponse(success=True, message="Social media post generated.", data=result)
