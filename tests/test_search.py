import pytest

from marinemarket.errors import InvalidSearchCriteriaError, UnsupportedCategoryError
from marinemarket.schemas import SearchFilter
from marinemarket.services import ads as ads_service
from marinemarket.services.search import normalize_sort_key, search, validate_filter

from .factories import (
    OWNER,
    add_ad,
    at,
    boat_spec,
    electronics_spec,
    jet_ski_spec,
    services_spec,
)


def ids(db, **criteria):
    return [a.id for a in search(db, SearchFilter(**criteria))]


def test_new_ad_is_found_exactly_once(db, identity):
    ad = add_ad(db, identity)
    assert ids(db, category="BOATS_AND_YACHTS") == [ad.id]


def test_category_is_required():
    with pytest.raises(InvalidSearchCriteriaError) as ei:
        validate_filter(SearchFilter(query="лодка"))
    assert ei.value.field == "category"


def test_unknown_category():
    with pytest.raises(UnsupportedCategoryError):
        validate_filter(SearchFilter(category="ROCKETS"))


class _NoStore:
    def execute(self, *args, **kwargs):
        raise AssertionError("store must not be queried")


@pytest.mark.parametrize(
    "criteria",
    [
        {"min_price": 500, "max_price": 100},
        {"min_year": 2020, "max_year": 2010},
        {"price_type": "CHEAP"},
        {"ad_type": "LEASE"},
        {"condition": "BROKEN"},
    ],
)
def test_invalid_criteria_fail_before_store(criteria):
    with pytest.raises(InvalidSearchCriteriaError):
        search(_NoStore(), SearchFilter(category="BOATS_AND_YACHTS", **criteria))


def test_invalid_electronics_type(db):
    with pytest.raises(InvalidSearchCriteriaError) as ei:
        search(db, SearchFilter(category="MARINE_ELECTRONICS", electronics_type="TOASTER"))
    assert ei.value.field == "electronics_type"


def test_fields_foreign_to_category_are_ignored(db, identity):
    boat = add_ad(db, identity)
    # electronics_type не объявлен у лодок и не сужает выдачу
    assert ids(db, category="BOATS_AND_YACHTS", electronics_type="TOASTER") == [boat.id]


def test_brand_does_not_cross_categories(db, identity):
    boat = add_ad(db, identity)
    add_ad(db, identity, category="JET_SKIS", spec=jet_ski_spec(brand="Bavaria"))
    assert ids(db, category="BOATS_AND_YACHTS", brand="bavaria") == [boat.id]
    assert ids(db, category="BOATS_AND_YACHTS", brand="Jeanneau") == []


def test_brand_filter_does_not_match_model(db, identity):
    boat = add_ad(db, identity, spec=boat_spec(brand="Jeanneau", model="Bavaria"))
    add_ad(db, identity, category="JET_SKIS", spec=jet_ski_spec(brand="Bavaria"))
    assert ids(db, category="BOATS_AND_YACHTS", brand="Bavaria") == []
    assert ids(db, category="BOATS_AND_YACHTS", model="Bavaria") == [boat.id]


def test_like_wildcards_are_literal(db, identity):
    add_ad(db, identity, location="Varna")
    pct = add_ad(db, identity, location="Port 100%", title="Boat_for sale")
    assert ids(db, category="BOATS_AND_YACHTS", location="%") == [pct.id]
    assert ids(db, category="BOATS_AND_YACHTS", location="V_rna") == []
    assert ids(db, category="BOATS_AND_YACHTS", query="t_f") == [pct.id]
    assert ids(db, category="BOATS_AND_YACHTS", query="boat%sale") == []


def test_common_and_year_filters(db, identity):
    cheap = add_ad(db, identity, price=20000, spec=boat_spec(year=2005), location="Burgas")
    dear = add_ad(db, identity, price=90000, spec=boat_spec(year=2021), title="Yacht Bavaria Cruiser")

    assert ids(db, category="BOATS_AND_YACHTS", max_price=50000) == [cheap.id]
    assert ids(db, category="BOATS_AND_YACHTS", min_year=2010) == [dear.id]
    assert ids(db, category="BOATS_AND_YACHTS", location="burg") == [cheap.id]
    assert ids(db, category="BOATS_AND_YACHTS", query="YACHT") == [dear.id]
    assert ids(db, category="BOATS_AND_YACHTS", condition="used", sort_by="OLDEST") == [cheap.id, dear.id]


def test_inactive_ads_are_excluded(db, identity):
    ad = add_ad(db, identity)
    ads_service.set_status(db, ad.id, False, OWNER)
    assert ids(db, category="BOATS_AND_YACHTS") == []


def test_null_price_sorts_last_both_ways(db, identity):
    a = add_ad(db, identity, price=100, created_at=at(1))
    b = add_ad(db, identity, price=None, price_type="NEGOTIABLE", created_at=at(2))
    c = add_ad(db, identity, price=50, created_at=at(3))

    assert ids(db, category="BOATS_AND_YACHTS", sort_by="PRICE_LOW_TO_HIGH") == [c.id, a.id, b.id]
    assert ids(db, category="BOATS_AND_YACHTS", sort_by="PRICE_HIGH_TO_LOW") == [a.id, c.id, b.id]


def test_most_viewed_ties_break_newest_first(db, identity):
    ad1 = add_ad(db, identity, created_at=at(1), views=5)
    ad2 = add_ad(db, identity, created_at=at(2), views=5)
    ad3 = add_ad(db, identity, created_at=at(3), views=10)
    assert ids(db, category="BOATS_AND_YACHTS", sort_by="MOST_VIEWED") == [ad3.id, ad2.id, ad1.id]


def test_unknown_sort_falls_back_to_newest(db, identity):
    first = add_ad(db, identity, created_at=at(1))
    second = add_ad(db, identity, created_at=at(2))
    assert ids(db, category="BOATS_AND_YACHTS", sort_by="RANDOM") == [second.id, first.id]
    assert normalize_sort_key("price_asc") == "PRICE_LOW_TO_HIGH"
    assert normalize_sort_key(None) == "NEWEST"


def test_identical_searches_give_identical_order(db, identity):
    for h in range(4):
        add_ad(db, identity, price=1000, created_at=at(h))
    crit = dict(category="BOATS_AND_YACHTS", sort_by="PRICE_LOW_TO_HIGH")
    assert ids(db, **crit) == ids(db, **crit)


def test_electronics_filters(db, identity):
    sonar = add_ad(db, identity, category="MARINE_ELECTRONICS", spec=electronics_spec(), price=300)
    add_ad(
        db, identity, category="MARINE_ELECTRONICS", price=500,
        spec=electronics_spec(electronics_type="CHARTPLOTTER", gps_integrated=False),
    )
    assert ids(db, category="MARINE_ELECTRONICS", electronics_type="fish_finder") == [sonar.id]
    assert ids(db, category="MARINE_ELECTRONICS", gps_integrated=True) == [sonar.id]


def test_services_supported_brand_substring(db, identity):
    svc = add_ad(db, identity, category="SERVICES", spec=services_spec(), price=None, price_type="ON_REQUEST")
    add_ad(
        db, identity, category="SERVICES", price=None, price_type="ON_REQUEST",
        spec=services_spec(supported_brands=["Suzuki"], is_authorized_service=False),
    )
    assert ids(db, category="SERVICES", supported_brand="merc") == [svc.id]
    assert ids(db, category="SERVICES", authorized_service=True) == [svc.id]
    # у услуг нет состояния, фильтр не применяется
    assert len(ids(db, category="SERVICES", condition="NEW")) == 2


def test_search_is_lazy(db, identity):
    add_ad(db, identity)
    stream = search(db, SearchFilter(category="BOATS_AND_YACHTS"))
    assert next(stream).category == "BOATS_AND_YACHTS"
    stream.close()
