import json
from typing import Dict, List, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from loguru import logger

from EventHub import prompts
from EventHub.completion import CompletionClient
from EventHub.config import settings
from EventHub.database import Booking, Event, Vendor
from EventHub.errors import ForbiddenError, NotFoundError, UpstreamParseError
from EventHub.schemas.recommendation import (
    VendorRecommendationCriteria, BudgetCriteria, PricingCriteria, SocialMediaRequest, SocialMediaPost,
    VendorRecommendationResult, BudgetRecommendationResult, PricingSuggestionResult,
)
from EventHub.scoring import average_costs_by_type


def parse_completion(reply: str, model: Type[BaseModel], operation: str) -> dict:
    """Parse a JSON completion reply and validate it against `model`."""
    try:
        payload = json.loads(reply)
    except (TypeError, json.JSONDecodeError) as e:
        logger.warning(f"{operation}: reply is not valid JSON: {e}")
        raise UpstreamParseError(f"{operation}: reply is not valid JSON") from e
    if not isinstance(payload, dict):
        raise UpstreamParseError(f"{operation}: reply is not a JSON object")
    try:
        result = model.model_validate(payload)
    except PydanticValidationError as e:
        logger.warning(f"{operation}: reply does not match expected shape: {e.error_count()} error(s)")
        raise UpstreamParseError(f"{operation}: reply does not match expected shape") from e
    return result.model_dump(by_alias=True)


class RecommendationService:
    """Builds prompts from stored data, calls the completion service and parses the reply."""

    def __init__(self, db: Session, client: CompletionClient):
        self.db = db
        self.client = client

    # --- snapshots ---------------------------------------------------------

    def past_vendor_preferences(self, user_id: str) -> List[dict]:
        bookings = (
            self.db.query(Booking)
            .filter(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc())
            .limit(settings.PAST_BOOKINGS_LIMIT)
            .all()
        )
        vendor_ids = {b.vendor_id for b in bookings}
        vendors = {
            v.vendor_id: v
            for v in self.db.query(Vendor).filter(Vendor.vendor_id.in_(vendor_ids)).all()
        } if vendor_ids else {}
        preferences = []
        for booking in bookings:
            vendor = vendors.get(booking.vendor_id)
            # Bookings hold advisory references; skip vendors that no longer exist
            if vendor is None:
                continue
            preferences.append({"serviceType": vendor.service_type.value, "rating": vendor.average_rating})
        return preferences

    def candidate_vendors(self, event_type: str = None) -> List[Vendor]:
        query = self.db.query(Vendor).filter(
            Vendor.is_verified == True,  # noqa: E712
            Vendor.average_rating >= settings.RECOMMENDATION_MIN_RATING,
        )
        if event_type:
            query = query.filter(Vendor.service_type.in_(prompts.get_vendor_types_for_event(event_type)))
        return (
            query.order_by(Vendor.average_rating.desc())
            .limit(settings.RECOMMENDATION_VENDOR_LIMIT)
            .all()
        )

    @staticmethod
    def vendor_snapshot(vendor: Vendor) -> dict:
        return {
            "id": vendor.vendor_id,
            "businessName": vendor.business_name,
            "serviceType": vendor.service_type.value,
            "rating": vendor.average_rating,
            "services": [
                {"name": s.name, "price": s.price, "priceUnit": s.price_unit.value}
                for s in vendor.services
            ],
        }

    def average_vendor_costs(self, event_type: str = None) -> Dict[str, float]:
        vendors_by_type = {}
        for vendor_type in prompts.get_vendor_types_for_event(event_type):
            vendors_by_type[vendor_type] = self.db.query(Vendor).filter(
                Vendor.service_type == vendor_type,
                Vendor.is_verified == True,  # noqa: E712
            ).all()
        return average_costs_by_type(vendors_by_type)

    def market_prices(self, own_vendor: Vendor, service_type: str, service_name: str = None) -> List[dict]:
        similar_vendors = self.db.query(Vendor).filter(
            Vendor.service_type == service_type,
            Vendor.vendor_id != own_vendor.vendor_id,
        ).all()
        needle = service_name.lower() if service_name else None
        prices = []
        for vendor in similar_vendors:
            for service in vendor.services:
                if needle and needle not in service.name.lower():
                    continue
                prices.append({
                    "price": service.price,
                    "priceUnit": service.price_unit.value,
                    "vendorRating": vendor.average_rating,
                })
        return prices

    # --- operations --------------------------------------------------------

    def vendor_recommendations(self, criteria: VendorRecommendationCriteria, user_id: str) -> dict:
        past_preferences = self.past_vendor_preferences(user_id)
        vendors = [self.vendor_snapshot(v) for v in self.candidate_vendors(criteria.event_type)]
        prompt = prompts.build_vendor_recommendation_prompt(vendors, past_preferences, criteria.model_dump())
        reply = self.client.complete(
            prompts.VENDOR_SYSTEM_PROMPT, prompt, json_format=True, operation="vendor_recommendations"
        )
        return parse_completion(reply, VendorRecommendationResult, "vendor_recommendations")

    def budget_recommendations(self, criteria: BudgetCriteria) -> dict:
        vendor_costs = self.average_vendor_costs(criteria.event_type)
        prompt = prompts.build_budget_prompt(vendor_costs, criteria.model_dump())
        reply = self.client.complete(
            prompts.BUDGET_SYSTEM_PROMPT, prompt, json_format=True, operation="budget_recommendations"
        )
        return parse_completion(reply, BudgetRecommendationResult, "budget_recommendations")

    def pricing_suggestions(self, criteria: PricingCriteria, user_id: str) -> dict:
        vendor = self.db.query(Vendor).filter(Vendor.user_id == user_id).first()
        if not vendor:
            raise NotFoundError("Vendor profile not found")

        service_type = criteria.service_type or vendor.service_type.value
        market_prices = self.market_prices(vendor, service_type, criteria.service_name)
        prompt = prompts.build_pricing_prompt(market_prices, {
            "service_type": service_type,
            "service_name": criteria.service_name,
            "current_price": criteria.current_price,
            "vendor_rating": vendor.average_rating,
        })
        reply = self.client.complete(
            prompts.PRICING_SYSTEM_PROMPT, prompt, json_format=True, operation="pricing_suggestions"
        )
        return parse_completion(reply, PricingSuggestionResult, "pricing_suggestions")

    def social_media_post(self, request: SocialMediaRequest, user_id: str) -> SocialMediaPost:
        event = self.db.query(Event).filter(Event.event_id == request.event_id).first()
        if not event:
            raise NotFoundError("Event not found")
        if event.user_id != user_id:
            raise ForbiddenError("Not authorized to access this event")

        prompt = prompts.build_social_media_prompt(event, request.platform, request.tone)
        content = self.client.complete(prompts.SOCIAL_SYSTEM_PROMPT, prompt, operation="social_media_post")
        if not content.strip():
            raise UpstreamParseError("social_media_post: empty reply")
        return SocialMediaPost(platform=request.platform, content=content)
