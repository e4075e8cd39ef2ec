from __future__ import annotations

from app.application.utils.service_resolver import find_service, format_price, list_services_summary
from app.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOG


def test_exact_id_and_name():
    assert find_service("bridal", SERVICE_CATALOG).id == "bridal"
    assert find_service("Natural Beat", SERVICE_CATALOG).id == "natural"
    assert find_service("  PARTY   glam ", SERVICE_CATALOG).id == "party"


def test_earlier_catalog_entry_wins_over_later_exact_name():
    # "bridal" is contained in "bridal trial" and Bridal Glam comes first in the catalog
    assert find_service("Bridal Trial", SERVICE_CATALOG).id == "bridal"
    assert find_service("trial", SERVICE_CATALOG).id == "trial"


def test_containment_either_direction():
    assert find_service("I'd like the party glam please", SERVICE_CATALOG).id == "party"
    assert find_service("natur", SERVICE_CATALOG).id == "natural"


def test_catalog_order_breaks_ties():
    # "glam" is part of both Bridal Glam and Party Glam
    assert find_service("glam", SERVICE_CATALOG).id == "bridal"


def test_unknown_service():
    assert find_service("haircut", SERVICE_CATALOG) is None
    assert find_service("   ", SERVICE_CATALOG) is None


def test_resolution_is_stable():
    first = find_service("bridal glam", SERVICE_CATALOG)
    second = find_service("bridal glam", SERVICE_CATALOG)
    assert first.id == second.id == "bridal"


def test_price_formatting_and_summary():
    assert format_price(35000) == "$350.00"
    assert format_price(123456) == "$1,234.56"
    summary = list_services_summary(SERVICE_CATALOG)
    assert summary.splitlines()[0] == "Bridal Glam — 120 min, $350.00"
    assert len(summary.splitlines()) == len(SERVICE_CATALOG)
