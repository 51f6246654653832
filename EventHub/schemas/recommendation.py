"""
Request criteria and reply shapes for the recommendation engine.

Reply models mirror the JSON structure requested in EventHub.prompts (camelCase
on the wire). Required fields are the ones a caller cannot do without; the
descriptive text fields fall back to empty values when the model omits them.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Reply(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# Criteria

class VendorRecommendationCriteria(BaseModel):
    event_type: Optional[str] = None
    budget: Optional[float] = None
    location: Optional[str] = None
    guest_count: Optional[int] = None
    preferences: Optional[str] = None


class BudgetCriteria(BaseModel):
    event_type: Optional[str] = None
    total_budget: Optional[float] = None
    guest_count: Optional[int] = None
    location: Optional[str] = None
    preferences: Optional[str] = None


class PricingCriteria(BaseModel):
    service_type: Optional[str] = None
    service_name: Optional[str] = None
    current_price: Optional[float] = None


class SocialMediaRequest(BaseModel):
    """Schema for social media post generation."""
    event_id: str = Field(..., alias="eventId")
    platform: str = Field(..., min_length=1, max_length=50)
    tone: Optional[str] = Field(None, max_length=50)

    model_config = ConfigDict(populate_by_name=True)


class SocialMediaPost(BaseModel):
    platform: str
    content: str


# Vendor recommendations

class VendorRecommendation(_Reply):
    vendor_id: str = Field(..., alias="vendorId")
    vendor_name: str = Field("", alias="vendorName")
    service_type: str = Field("", alias="serviceType")
    reason: str = ""
    estimated_cost: float = Field(..., alias="estimatedCost")
    special_considerations: str = Field("", alias="specialConsiderations")

    @field_validator("vendor_id", mode="before")
    @classmethod
    def id_as_string(cls, v):
        return str(v) if isinstance(v, (int, float)) else v


class VendorRecommendationResult(_Reply):
    recommendations: List[VendorRecommendation]
    total_estimated_cost: float = Field(..., alias="totalEstimatedCost")
    budget_analysis: str = Field("", alias="budgetAnalysis")


# Budget

class BudgetAllocation(_Reply):
    vendor_type: str = Field(..., alias="vendorType")
    allocation: float
    percentage_of_total: float = Field(0, alias="percentageOfTotal")
    notes: str = ""


class SavingsSuggestion(_Reply):
    area: str
    potential_savings: float = Field(0, alias="potentialSavings")
    impact: str = ""


class AlternativeOption(_Reply):
    description: str
    estimated_savings: float = Field(0, alias="estimatedSavings")


class BudgetRecommendationResult(_Reply):
    budget_breakdown: List[BudgetAllocation] = Field(..., alias="budgetBreakdown")
    cost_per_guest: float = Field(..., alias="costPerGuest")
    savings_suggestions: List[SavingsSuggestion] = Field(default_factory=list, alias="savingsSuggestions")
    alternative_options: List[AlternativeOption] = Field(default_factory=list, alias="alternativeOptions")


# Pricing

class PriceRange(_Reply):
    min: float
    max: float


class SeasonalAdjustment(_Reply):
    season: str
    adjustment_factor: float = Field(..., alias="adjustmentFactor")
    reasoning: str = ""


class PricingSuggestionResult(_Reply):
    recommended_price_range: PriceRange = Field(..., alias="recommendedPriceRange")
    optimal_price: float = Field(..., alias="optimalPrice")
    analysis: str = ""
    seasonal_strategy: List[SeasonalAdjustment] = Field(default_factory=list, alias="seasonalStrategy")
