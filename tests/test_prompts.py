from types import SimpleNamespace

from EventHub import prompts
from EventHub.database import EventTypeEnum
from EventHub.utils_time import format_event_date
from datetime import datetime


class TestVendorTypeLookup:

    def test_conference(self):
        assert set(prompts.get_vendor_types_for_event("conference")) == {
            "venue", "catering", "technology", "photography"
        }

    def test_wedding_extends_common_set(self):
        assert prompts.get_vendor_types_for_event("wedding") == [
            "catering", "decoration", "photography", "venue", "entertainment", "transportation"
        ]

    def test_unknown_and_missing_types_get_common_set(self):
        assert prompts.get_vendor_types_for_event("picnic") == prompts.COMMON_VENDOR_TYPES
        assert prompts.get_vendor_types_for_event(None) == prompts.COMMON_VENDOR_TYPES

    def test_lookup_returns_a_copy(self):
        types = prompts.get_vendor_types_for_event("birthday")
        types.append("other")
        assert "other" not in prompts.get_vendor_types_for_event("birthday")


class TestPromptBuilders:

    def test_missing_criteria_render_as_not_specified(self):
        prompt = prompts.build_vendor_recommendation_prompt([], [], {})
        assert "- Event Type: Not specified" in prompt
        assert "- Budget: Not specified" in prompt
        assert "- Additional Preferences: None" in prompt
        assert '"totalEstimatedCost": number' in prompt

    def test_budget_prompt_embeds_costs(self):
        prompt = prompts.build_budget_prompt({"venue": 2500.0}, {"event_type": "wedding", "guest_count": 50})
        assert '{"venue": 2500.0}' in prompt
        assert "- Event Type: wedding" in prompt
        assert "- Guest Count: 50" in prompt

    def test_social_prompt(self):
        event = SimpleNamespace(
            title="Tech Summit", event_type=EventTypeEnum.conference, date=datetime(2026, 3, 5),
            location="", description="Talks and demos",
        )
        prompt = prompts.build_social_media_prompt(event, "linkedin", None)
        assert "- Event Name: Tech Summit" in prompt
        assert "- Event Type: conference" in prompt
        assert "- Date: March 5, 2026" in prompt
        assert "- Location: Not specified" in prompt
        assert "for linkedin and have a friendly tone" in prompt

    def test_pricing_prompt(self):
        prompt = prompts.build_pricing_prompt([], {"service_type": "venue", "current_price": 100})
        assert "- Service Type: venue" in prompt
        assert "- Service Name: Not specified" in prompt
        assert "- Current Price: 100" in prompt


def test_format_event_date():
    assert format_event_date(None) == "Not specified"
    assert format_event_date("next Friday") == "next Friday"
    assert format_event_date(datetime(2026, 12, 25)) == "December 25, 2026"
