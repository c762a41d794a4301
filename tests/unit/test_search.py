"""
Unit tests for public listing queries: search, detail, stats and slugs.
"""

import pytest

from xactestate.core.models import SearchFilters
from xactestate.exceptions import NotFoundError, ValidationError
from xactestate.listings.search import get_property_detail, parse_filters, search_properties
from xactestate.listings.slugs import slugify, unique_slug
from xactestate.listings.stats import get_market_stats


def _ids(page):
    return [p.id for p in page.properties]


class TestParseFilters:
    """Tests for parse_filters function."""

    def test_defaults(self, test_config):
        filters = parse_filters({})
        assert filters == SearchFilters(page=1, limit=12)

    def test_all_values_mean_no_filter(self, test_config):
        filters = parse_filters({"listingType": "ALL", "propertyType": "All", "location": "All"})
        assert filters.listing_type is None
        assert filters.property_type is None
        assert filters.location is None

    def test_property_type_upper_cased(self, test_config):
        assert parse_filters({"propertyType": "apartment"}).property_type == "APARTMENT"

    def test_numbers(self, test_config):
        filters = parse_filters({"minBeds": "2", "maxPrice": "900000", "minArea": "50"})
        assert (filters.min_beds, filters.max_price, filters.min_area) == (2, 900000, 50)

    def test_non_integer_rejected(self, test_config):
        with pytest.raises(ValidationError) as exc_info:
            parse_filters({"minBeds": "two"})
        assert exc_info.value.field == "minBeds"

    def test_unknown_sort_falls_back(self, test_config):
        assert parse_filters({"sortBy": "random"}).sort_by == "newest"

    def test_page_and_limit_clamped(self, test_config):
        filters = parse_filters({"page": "0", "limit": "500"})
        assert filters.page == 1
        assert filters.limit == 50
        assert parse_filters({"limit": "-3"}).limit == 1

    def test_featured_flag(self, test_config):
        assert parse_filters({"featured": "true"}).featured is True
        assert parse_filters({"featured": "yes"}).featured is False


class TestSearchProperties:
    """Tests for search_properties function."""

    def test_only_published_newest_first(self, conn, test_config):
        page = search_properties(conn, SearchFilters())
        assert _ids(page) == ["prop-1", "prop-2", "prop-3", "prop-5"]
        assert page.total == 4
        assert page.total_pages == 1

    def test_card_fields(self, conn, test_config):
        card = search_properties(conn, SearchFilters()).properties[0]
        assert card.address == "1 Rue de Test, Luxembourg"
        assert card.location == "Luxembourg"
        assert card.image == "/img/kirchberg-1.jpg"
        assert card.tag == "Featured"
        assert card.agency.slug == "xact-kirchberg"

    def test_card_defaults(self, conn, test_config):
        studio = search_properties(conn, SearchFilters(property_type="STUDIO")).properties[0]
        assert studio.beds == 0
        assert studio.image == "/placeholder-property.svg"
        assert studio.tag == "Rental"
        assert studio.agency is None

    def test_sale_tag(self, conn, test_config):
        house = search_properties(conn, SearchFilters(property_type="HOUSE")).properties[0]
        assert house.tag == "For Sale"

    def test_listing_type_filter(self, conn, test_config):
        assert _ids(search_properties(conn, SearchFilters(listing_type="RENT"))) == ["prop-3", "prop-5"]

    def test_location_filter(self, conn, test_config):
        assert _ids(search_properties(conn, SearchFilters(location="Bertrange"))) == ["prop-2"]

    def test_numeric_filters(self, conn, test_config):
        assert _ids(search_properties(conn, SearchFilters(min_beds=3))) == ["prop-2"]
        assert _ids(search_properties(conn, SearchFilters(max_price=5000))) == ["prop-3", "prop-5"]
        assert _ids(search_properties(conn, SearchFilters(min_area=150))) == ["prop-2", "prop-5"]

    def test_featured_filter(self, conn, test_config):
        assert _ids(search_properties(conn, SearchFilters(featured=True))) == ["prop-1"]

    @pytest.mark.parametrize("sort_by,expected", [
        ("price-low", ["prop-3", "prop-5", "prop-1", "prop-2"]),
        ("price-high", ["prop-2", "prop-1", "prop-5", "prop-3"]),
        ("area-high", ["prop-5", "prop-2", "prop-1", "prop-3"]),
    ])
    def test_sorting(self, conn, test_config, sort_by, expected):
        assert _ids(search_properties(conn, SearchFilters(sort_by=sort_by))) == expected

    def test_pagination(self, conn, test_config):
        page = search_properties(conn, SearchFilters(page=2, limit=3))
        assert _ids(page) == ["prop-5"]
        assert page.total == 4
        assert page.total_pages == 2

    def test_page_past_end(self, conn, test_config):
        page = search_properties(conn, SearchFilters(page=9, limit=3))
        assert page.properties == []
        assert page.total == 4

    def test_no_matches(self, conn, test_config):
        page = search_properties(conn, SearchFilters(location="Vianden"))
        assert page.total == 0
        assert page.total_pages == 0

    def test_to_dict(self, conn, test_config):
        data = search_properties(conn, SearchFilters(limit=1)).to_dict()
        assert set(data) == {"properties", "total", "page", "limit", "totalPages"}
        assert data["properties"][0]["listingType"] == "SALE"


class TestPropertyDetail:
    """Tests for get_property_detail function."""

    def test_detail(self, conn, test_config):
        detail = get_property_detail(conn, "modern-apartment-in-kirchberg")
        assert detail.images == ["/img/kirchberg-1.jpg", "/img/kirchberg-2.jpg"]
        assert detail.features == ["Balcony", "Elevator"]
        assert detail.energy_class == "B"
        assert detail.floor == 3

    def test_default_agent_contact(self, conn, test_config):
        agent = get_property_detail(conn, "modern-apartment-in-kirchberg").agent
        assert agent.name == "Xact Real Estate"
        assert agent.phone == "+352 621 000 000"
        assert agent.email == "info@xact.lu"

    def test_assigned_agent_with_fallbacks(self, conn, test_config):
        agent = get_property_detail(conn, "family-house-in-bertrange").agent
        assert agent.name == "Marie Weber"
        assert agent.email == "marie@xact.lu"
        assert agent.phone == "+352 621 000 000"
        assert agent.image == "/xact-logo.svg"
        assert agent.agency == "Xact"

    def test_placeholder_image(self, conn, test_config):
        assert get_property_detail(conn, "studio-near-gare").images == ["/placeholder-property.svg"]

    def test_to_dict_omits_missing_optionals(self, conn, test_config):
        data = get_property_detail(conn, "studio-near-gare").to_dict()
        assert "landArea" not in data
        assert "yearBuilt" not in data
        house = get_property_detail(conn, "family-house-in-bertrange").to_dict()
        assert house["landArea"] == 600
        assert house["yearBuilt"] == 1998

    def test_similar_same_city_or_type(self, conn, test_config):
        detail = get_property_detail(conn, "modern-apartment-in-kirchberg")
        assert [p.id for p in detail.similar] == ["prop-3", "prop-5"]

    def test_similar_limited_to_three(self, conn, test_config, add_property):
        for i in range(4):
            add_property(
                id=f"extra-{i}", title=f"Extra {i}", slug=f"extra-{i}", type="HOUSE",
                price=100000, created_at=f"2024-02-0{i + 1}T00:00:00.000000Z",
            )
        detail = get_property_detail(conn, "family-house-in-bertrange")
        assert [p.id for p in detail.similar] == ["extra-3", "extra-2", "extra-1"]

    def test_unpublished_not_found(self, conn, test_config):
        with pytest.raises(NotFoundError):
            get_property_detail(conn, "villa-in-strassen")

    def test_unknown_slug(self, conn, test_config):
        with pytest.raises(NotFoundError):
            get_property_detail(conn, "nope")


class TestMarketStats:
    """Tests for get_market_stats function."""

    def test_stats(self, conn):
        stats = get_market_stats(conn)
        assert stats.active_listings == "4+"
        assert stats.property_value == "€2.0M"
        assert stats.satisfied_clients == "98%"
        assert stats.total_agencies == 1

    def test_categories(self, conn):
        categories = get_market_stats(conn).categories
        assert categories == {
            "Apartments": 1,
            "Houses": 1,
            "Villas": 0,
            "Land": 0,
            "Commercial": 1,
            "Studios": 1,
        }

    def test_empty_database(self, temp_db):
        from xactestate.core.database import get_connection
        with get_connection(temp_db) as empty:
            stats = get_market_stats(empty)
        assert stats.active_listings == "0+"
        assert stats.property_value == "€0"

    def test_to_dict_shape(self, conn):
        data = get_market_stats(conn).to_dict()
        assert data["stats"]["activeListings"] == "4+"
        assert data["totalAgencies"] == 1


class TestSlugs:
    """Tests for slug generation."""

    @pytest.mark.parametrize("title,expected", [
        ("Modern Apartment in Kirchberg", "modern-apartment-in-kirchberg"),
        ("  Villa -- with Pool!! ", "villa-with-pool"),
        ("Maison à Échternach", "maison-a-echternach"),
        ("Office Space Cloche d'Or", "office-space-cloche-d-or"),
        ("!!!", ""),
    ])
    def test_slugify(self, title, expected):
        assert slugify(title) == expected

    def test_unique_slug_free(self, conn):
        assert unique_slug(conn, "Brand New Loft") == "brand-new-loft"

    def test_unique_slug_collision(self, conn):
        assert unique_slug(conn, "Studio near Gare") == "studio-near-gare-2"

    def test_smallest_free_suffix(self, conn, add_property):
        add_property(title="Studio near Gare", slug="studio-near-gare-3", type="STUDIO", price=900)
        assert unique_slug(conn, "Studio near Gare") == "studio-near-gare-2"
        add_property(title="Studio near Gare", slug="studio-near-gare-2", type="STUDIO", price=900)
        assert unique_slug(conn, "Studio near Gare") == "studio-near-gare-4"

    def test_prefix_match_is_not_a_collision(self, conn):
        assert unique_slug(conn, "Studio near") == "studio-near"

    def test_exclude_self(self, conn):
        assert unique_slug(conn, "Studio near Gare", exclude_id="prop-3") == "studio-near-gare"

    def test_empty_title(self, conn):
        assert unique_slug(conn, "???") == "property"
