"""
Rating and price aggregation helpers.
"""

from typing import Dict, Iterable, List


def calculate_average_rating(ratings: Iterable[float]) -> float:
    """Unweighted mean of review ratings; 0 when there are no reviews."""
    ratings = list(ratings)
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def average_service_price(vendors) -> float:
    """Mean price across every service of every vendor given; 0 if none have services."""
    total = 0.0
    count = 0
    for vendor in vendors:
        for service in vendor.services:
            total += service.price
            count += 1
    return total / count if count > 0 else 0


def average_costs_by_type(vendors_by_type: Dict[str, List]) -> Dict[str, float]:
    """
    Average service price per vendor type.
    Types with no vendors at all are omitted from the result.
    """
    costs = {}
    for vendor_type, vendors in vendors_by_type.items():
        if vendors:
            costs[vendor_type] = average_service_price(vendors)
    return costs
