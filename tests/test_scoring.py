import pytest
from types import SimpleNamespace

from EventHub.database import VendorReview
from EventHub.pagination import build_pagination, page_window
from EventHub.scoring import average_costs_by_type, average_service_price, calculate_average_rating
from EventHub.services.vendor_service import VendorService as VendorProfileService

from conftest import make_user, make_vendor


def _vendor(*prices):
    return SimpleNamespace(services=[SimpleNamespace(price=p) for p in prices])


class TestAverageRating:

    def test_no_reviews_is_zero(self):
        assert calculate_average_rating([]) == 0.0

    def test_exact_mean(self):
        assert calculate_average_rating([5, 4, 3]) == 4.0
        assert calculate_average_rating([5, 4]) == pytest.approx(4.5)

    def test_recalculation_is_idempotent(self, db):
        owner = make_user(db, name="Rating Owner")
        vendor = make_vendor(db, owner)
        service = VendorProfileService(db)

        assert service.recalculate_average_rating(vendor) == 0.0

        vendor.reviews.append(VendorReview(user_id="u1", rating=5))
        vendor.reviews.append(VendorReview(user_id="u2", rating=2))
        first = service.recalculate_average_rating(vendor)
        second = service.recalculate_average_rating(vendor)
        assert first == second == pytest.approx(3.5)


class TestPriceAggregation:

    def test_average_service_price_over_all_services(self):
        assert average_service_price([_vendor(100, 200), _vendor(300)]) == pytest.approx(200)

    def test_vendors_without_services_average_to_zero(self):
        assert average_service_price([_vendor(), _vendor()]) == 0

    def test_types_without_vendors_are_omitted(self):
        costs = average_costs_by_type({
            "catering": [_vendor(50, 150)],
            "venue": [],
            "photography": [_vendor()],
        })
        assert costs == {"catering": 100, "photography": 0}


class TestPagination:

    def test_page_window(self):
        assert page_window(1, 10) == (0, 10)
        assert page_window(3, 10) == (20, 30)

    def test_middle_page_has_both_links(self):
        assert build_pagination(25, 2, 10) == {
            "next": {"page": 3, "limit": 10},
            "prev": {"page": 1, "limit": 10},
        }

    def test_last_page_has_only_prev(self):
        assert build_pagination(25, 3, 10) == {"prev": {"page": 2, "limit": 10}}

    def test_first_page_has_only_next(self):
        assert build_pagination(25, 1, 10) == {"next": {"page": 2, "limit": 10}}

    def test_single_page_has_no_links(self):
        assert build_pagination(5, 1, 10) == {}
