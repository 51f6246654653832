import json
from unittest.mock import MagicMock, patch

import openai
import pytest

from EventHub.completion import CompletionClient
from EventHub.database import Booking, ServiceTypeEnum, EventTypeEnum
from EventHub.errors import UpstreamParseError, UpstreamUnavailableError
from EventHub.schemas.recommendation import PricingSuggestionResult, VendorRecommendationResult
from EventHub.services.recommendation_service import parse_completion
from EventHub.utils_time import get_utc_time

from conftest import auth_headers, make_event, make_user, make_vendor

VENDOR_REPLY = {
    "recommendations": [
        {
            "vendorId": "v-1",
            "vendorName": "Sunset Venue",
            "serviceType": "venue",
            "reason": "Great reviews",
            "estimatedCost": 5000,
            "specialConsiderations": "Book early",
        }
    ],
    "totalEstimatedCost": 5000,
    "budgetAnalysis": "Within budget",
}

BUDGET_REPLY = {
    "budgetBreakdown": [{"vendorType": "venue", "allocation": 4000, "percentageOfTotal": 40, "notes": ""}],
    "costPerGuest": 100,
    "savingsSuggestions": [{"area": "decor", "potentialSavings": 300, "impact": "minor"}],
    "alternativeOptions": [{"description": "Weekday event", "estimatedSavings": 800}],
}

PRICING_REPLY = {
    "recommendedPriceRange": {"min": 40, "max": 60},
    "optimalPrice": 52,
    "analysis": "Priced slightly under market",
    "seasonalStrategy": [{"season": "summer", "adjustmentFactor": 1.1, "reasoning": "Peak demand"}],
}


def _book(db, user, vendor_id):
    db.add(Booking(
        user_id=user.user_id, event_id="e-1", vendor_id=vendor_id, service_id="s-1",
        booking_date=get_utc_time(), start_time="10:00", end_time="12:00", amount=100,
    ))
    db.commit()


class TestParseCompletion:

    def test_valid_reply(self):
        result = parse_completion(json.dumps(VENDOR_REPLY), VendorRecommendationResult, "test")
        assert result["recommendations"][0]["vendorId"] == "v-1"
        assert result["totalEstimatedCost"] == 5000

    def test_optional_text_fields_default_to_empty(self):
        reply = {"recommendations": [{"vendorId": 7, "estimatedCost": 10}], "totalEstimatedCost": 10}
        result = parse_completion(json.dumps(reply), VendorRecommendationResult, "test")
        assert result["recommendations"][0]["vendorId"] == "7"
        assert result["recommendations"][0]["reason"] == ""
        assert result["budgetAnalysis"] == ""

    @pytest.mark.parametrize("reply", [
        "not json at all",
        "[1, 2, 3]",
        json.dumps({"recommendations": []}),
        json.dumps({"recommendations": "none", "totalEstimatedCost": 1}),
        json.dumps({"recommendations": [{"vendorId": "v"}], "totalEstimatedCost": 1}),
    ])
    def test_malformed_replies_raise(self, reply):
        with pytest.raises(UpstreamParseError):
            parse_completion(reply, VendorRecommendationResult, "test")

    def test_nested_required_fields(self):
        with pytest.raises(UpstreamParseError):
            parse_completion(json.dumps({"recommendedPriceRange": {"min": 1}, "optimalPrice": 2}),
                             PricingSuggestionResult, "test")


class TestCompletionClient:

    def test_missing_api_key_is_unavailable(self):
        client = CompletionClient(api_key="")
        with pytest.raises(UpstreamUnavailableError):
            client.complete("system", "prompt")

    def test_json_operations_pin_response_format(self):
        client = CompletionClient(api_key="sk-test", model="gpt-4")
        fake_sdk = MagicMock()
        fake_sdk.chat.completions.create.return_value.choices = [
            MagicMock(message=MagicMock(content='{"ok": true}'))
        ]
        client._client = fake_sdk

        assert client.complete("system", "prompt", json_format=True) == '{"ok": true}'
        kwargs = fake_sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_sdk_errors_become_unavailable(self):
        client = CompletionClient(api_key="sk-test")
        fake_sdk = MagicMock()
        fake_sdk.chat.completions.create.side_effect = openai.OpenAIError("connection reset")
        client._client = fake_sdk

        with pytest.raises(UpstreamUnavailableError):
            client.complete("system", "prompt")

    def test_sdk_client_gets_timeout_and_no_retries(self):
        with patch("EventHub.completion.OpenAI") as sdk_cls:
            CompletionClient(api_key="sk-test", timeout=12).client
        sdk_cls.assert_called_once_with(api_key="sk-test", timeout=12, max_retries=0)


class TestVendorRecommendations:

    def test_snapshot_and_reply(self, client, db, user, fake_completion):
        owner = make_user(db, name="Vendor Owner", role="vendor")
        venue = make_vendor(db, owner, name="Sunset Venue", service_type=ServiceTypeEnum.venue, rating=4.7,
                            services=[("Hall rental", 3000)])
        make_vendor(db, owner, name="Unverified Venue", service_type=ServiceTypeEnum.venue, rating=5, verified=False)
        make_vendor(db, owner, name="Low Rated Venue", service_type=ServiceTypeEnum.venue, rating=3.9)
        make_vendor(db, owner, name="Tech Crew", service_type=ServiceTypeEnum.technology, rating=4.9)
        _book(db, user, venue.vendor_id)
        _book(db, user, "vendor-that-was-deleted")
        fake_completion.queue(json.dumps(VENDOR_REPLY))

        response = client.get(
            "/api/ai/recommendations/vendors",
            params={"eventType": "wedding", "budget": 10000, "guestCount": 80},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        assert response.json()["data"]["recommendations"][0]["vendorName"] == "Sunset Venue"

        call = fake_completion.calls[0]
        assert call["json_format"] is True
        prompt = call["prompt"]
        assert "Sunset Venue" in prompt
        assert "Hall rental" in prompt
        assert "Unverified Venue" not in prompt
        assert "Low Rated Venue" not in prompt
        # technology is not a wedding vendor type
        assert "Tech Crew" not in prompt
        assert "- Location: Not specified" in prompt
        assert "- Additional Preferences: None" in prompt
        assert '[{"serviceType": "venue", "rating": 4.7}]' in prompt

    def test_without_event_type_all_types_qualify(self, client, db, user, fake_completion):
        owner = make_user(db, name="Vendor Owner", role="vendor")
        make_vendor(db, owner, name="Tech Crew", service_type=ServiceTypeEnum.technology, rating=4.9)
        fake_completion.queue(json.dumps(VENDOR_REPLY))

        client.get("/api/ai/recommendations/vendors", headers=auth_headers(user))

        assert "Tech Crew" in fake_completion.calls[0]["prompt"]

    def test_malformed_reply_is_opaque_500(self, client, user, fake_completion):
        fake_completion.queue("Sorry, I cannot help with that.")

        response = client.get("/api/ai/recommendations/vendors", headers=auth_headers(user))

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Server Error", "data": None}

    def test_missing_required_field_is_opaque_500(self, client, user, fake_completion):
        fake_completion.queue(json.dumps({"recommendations": []}))

        response = client.get("/api/ai/recommendations/vendors", headers=auth_headers(user))

        assert response.status_code == 500
        assert response.json()["message"] == "Server Error"


class TestBudgetRecommendations:

    def test_average_costs_per_type(self, client, db, user, fake_completion):
        owner = make_user(db, name="Vendor Owner", role="vendor")
        make_vendor(db, owner, service_type=ServiceTypeEnum.catering, services=[("Buffet", 40), ("Plated", 60)])
        make_vendor(db, owner, service_type=ServiceTypeEnum.catering, services=[("Tasting", 20)], verified=False)
        make_vendor(db, owner, service_type=ServiceTypeEnum.photography)
        fake_completion.queue(json.dumps(BUDGET_REPLY))

        response = client.get(
            "/api/ai/recommendations/budget",
            params={"eventType": "birthday", "totalBudget": 10000, "guestCount": 100},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        assert response.json()["data"]["costPerGuest"] == 100
        prompt = fake_completion.calls[0]["prompt"]
        assert '{"catering": 50.0, "photography": 0}' in prompt
        assert "- Total Budget: 10000.0" in prompt


class TestPricingSuggestions:

    def test_market_prices_exclude_own_profile(self, client, db, fake_completion):
        me = make_user(db, name="Me Vendor", role="vendor")
        make_vendor(db, me, name="Mine", rating=4.0, services=[("Buffet dinner", 999)])
        rival = make_user(db, name="Rival Vendor", role="vendor")
        make_vendor(db, rival, name="Rival", rating=4.5, services=[("Buffet lunch", 30), ("Cake", 15)])
        fake_completion.queue(json.dumps(PRICING_REPLY))

        response = client.get(
            "/api/ai/pricing-suggestions",
            params={"serviceName": "BUFFET", "currentPrice": 35},
            headers=auth_headers(me),
        )

        assert response.status_code == 200
        assert response.json()["data"]["optimalPrice"] == 52
        prompt = fake_completion.calls[0]["prompt"]
        assert '[{"price": 30.0, "priceUnit": "flat", "vendorRating": 4.5}]' in prompt
        assert "- Service Type: catering" in prompt
        assert "- Vendor Rating: 4.0" in prompt

    def test_plain_user_is_forbidden(self, client, user, fake_completion):
        response = client.get("/api/ai/pricing-suggestions", headers=auth_headers(user))
        assert response.status_code == 403
        assert fake_completion.calls == []

    def test_caller_without_profile_is_404(self, client, admin, fake_completion):
        response = client.get("/api/ai/pricing-suggestions", headers=auth_headers(admin))
        assert response.status_code == 404
        assert fake_completion.calls == []


class TestSocialMediaPost:

    def test_generates_post_for_own_event(self, client, db, user, fake_completion):
        event = make_event(db, user, event_type=EventTypeEnum.corporate)
        fake_completion.queue("Join us for the Summer Gala! #gala")

        response = client.post(
            "/api/ai/social-media", json={"eventId": event.event_id, "platform": "instagram"},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"platform": "instagram", "content": "Join us for the Summer Gala! #gala"}
        call = fake_completion.calls[0]
        assert call["json_format"] is False
        assert "friendly tone" in call["prompt"]
        assert "Event Type: corporate" in call["prompt"]

    def test_someone_elses_event_is_forbidden_without_completion_call(self, client, db, user, other_user,
                                                                       fake_completion):
        event = make_event(db, other_user)

        response = client.post(
            "/api/ai/social-media", json={"eventId": event.event_id, "platform": "x"}, headers=auth_headers(user)
        )

        assert response.status_code == 403
        assert fake_completion.calls == []

    def test_unknown_event_is_404(self, client, user, fake_completion):
        response = client.post(
            "/api/ai/social-media", json={"eventId": "missing", "platform": "x"}, headers=auth_headers(user)
        )
        assert response.status_code == 404
        assert fake_completion.calls == []

    def test_empty_reply_is_opaque_500(self, client, db, user, fake_completion):
        event = make_event(db, user)
        fake_completion.queue("   ")

        response = client.post(
            "/api/ai/social-media", json={"eventId": event.event_id, "platform": "x", "tone": "formal"},
            headers=auth_headers(user),
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Server Error"
