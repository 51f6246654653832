"""
Prompt templates for the recommendation engine, plus the event-type lookup table.

Each JSON template spells out the reply shape inline; replies are still
validated field by field in EventHub.schemas.recommendation.
"""

import json
from typing import Dict, List, Optional

from EventHub.utils_time import format_event_date

NOT_SPECIFIED = "Not specified"

COMMON_VENDOR_TYPES = ["catering", "decoration", "photography", "venue"]

EVENT_VENDOR_TYPES: Dict[str, List[str]] = {
    "wedding": COMMON_VENDOR_TYPES + ["entertainment", "transportation"],
    "corporate": COMMON_VENDOR_TYPES + ["entertainment", "technology"],
    "birthday": COMMON_VENDOR_TYPES + ["entertainment"],
    "conference": ["venue", "catering", "technology", "photography"],
}

VENDOR_SYSTEM_PROMPT = "You are an AI event planning assistant that provides personalized vendor recommendations."
BUDGET_SYSTEM_PROMPT = "You are an AI event planning assistant that provides personalized budget recommendations."
SOCIAL_SYSTEM_PROMPT = "You are an AI social media content creator that generates engaging event announcements."
PRICING_SYSTEM_PROMPT = "You are an AI pricing analyst that provides market-based pricing suggestions for event vendors."


def get_vendor_types_for_event(event_type: Optional[str]) -> List[str]:
    """Vendor types relevant to an event type; unknown or missing types get the common set."""
    return list(EVENT_VENDOR_TYPES.get(event_type or "", COMMON_VENDOR_TYPES))


def _value(value, default: str = NOT_SPECIFIED) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _dumps(data) -> str:
    return json.dumps(data, default=str)


def build_vendor_recommendation_prompt(vendors: List[dict], past_preferences: List[dict], criteria: dict) -> str:
    return f"""
I need vendor recommendations for an event with the following criteria:
- Event Type: {_value(criteria.get('event_type'))}
- Budget: {_value(criteria.get('budget'))}
- Location: {_value(criteria.get('location'))}
- Guest Count: {_value(criteria.get('guest_count'))}
- Additional Preferences: {_value(criteria.get('preferences'), 'None')}

The user has previously booked these types of vendors:
{_dumps(past_preferences)}

Here are the available vendors:
{_dumps(vendors)}

Please provide recommendations for each vendor type needed for this event.
For each recommendation, include:
1. The vendor ID
2. Why this vendor is recommended
3. Estimated cost
4. Any special considerations

Format your response as a JSON object with the following structure:
{{
  "recommendations": [
    {{
      "vendorId": "id",
      "vendorName": "name",
      "serviceType": "type",
      "reason": "reason for recommendation",
      "estimatedCost": number,
      "specialConsiderations": "any special notes"
    }}
  ],
  "totalEstimatedCost": number,
  "budgetAnalysis": "analysis of how these recommendations fit within the budget"
}}
"""


def build_budget_prompt(vendor_costs: Dict[str, float], criteria: dict) -> str:
    return f"""
I need budget recommendations for an event with the following criteria:
- Event Type: {_value(criteria.get('event_type'))}
- Total Budget: {_value(criteria.get('total_budget'))}
- Guest Count: {_value(criteria.get('guest_count'))}
- Location: {_value(criteria.get('location'))}
- Additional Preferences: {_value(criteria.get('preferences'), 'None')}

Here are the average costs for different vendor types in this area:
{_dumps(vendor_costs)}

Please provide a detailed budget breakdown for this event, including:
1. Recommended allocation for each vendor type
2. Estimated cost per guest
3. Areas where costs can be reduced if needed
4. Alternative options for staying within budget

Format your response as a JSON object with the following structure:
{{
  "budgetBreakdown": [
    {{
      "vendorType": "type",
      "allocation": number,
      "percentageOfTotal": number,
      "notes": "any special notes"
    }}
  ],
  "costPerGuest": number,
  "savingsSuggestions": [
    {{
      "area": "area where costs can be reduced",
      "potentialSavings": number,
      "impact": "description of impact on event quality"
    }}
  ],
  "alternativeOptions": [
    {{
      "description": "alternative approach",
      "estimatedSavings": number
    }}
  ]
}}
"""


def build_social_media_prompt(event, platform: str, tone: Optional[str]) -> str:
    event_type = getattr(event.event_type, "value", event.event_type)
    return f"""
I need to create a social media post announcing an event with the following details:
- Event Name: {event.title}
- Event Type: {event_type}
- Date: {format_event_date(event.date)}
- Location: {_value(event.location)}
- Description: {event.description}

The post should be for {platform} and have a {tone or 'friendly'} tone.

Please create an engaging post that would generate excitement about this event.
Include appropriate hashtags and a call to action.
"""


def build_pricing_prompt(market_prices: List[dict], criteria: dict) -> str:
    return f"""
I need pricing suggestions for a vendor service with the following details:
- Service Type: {_value(criteria.get('service_type'))}
- Service Name: {_value(criteria.get('service_name'))}
- Current Price: {_value(criteria.get('current_price'))}
- Vendor Rating: {_value(criteria.get('vendor_rating'))}

Here is market data for similar services:
{_dumps(market_prices)}

Please provide pricing suggestions based on this market data, including:
1. Recommended price range
2. Optimal price point
3. Analysis of how the vendor's rating affects pricing
4. Seasonal pricing strategy

Format your response as a JSON object with the following structure:
{{
  "recommendedPriceRange": {{
    "min": number,
    "max": number
  }},
  "optimalPrice": number,
  "analysis": "detailed analysis of pricing recommendation",
  "seasonalStrategy": [
    {{
      "season": "season name",
      "adjustmentFactor": number,
      "reasoning": "reason for adjustment"
    }}
  ]
}}
"""
