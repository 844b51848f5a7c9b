"""Application tests for product and variant read paths."""

import json

import pytest
from catalogue.brand.management import CreateBrand
from catalogue.category.management import CreateCategory
from catalogue.product import queries
from catalogue.product.creation import CreateProduct
from catalogue.product.lifecycle import DeactivateProduct
from catalogue.product.variants import AddVariant, DeactivateVariant
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain


@pytest.fixture
def category_id():
    return current_domain.process(CreateCategory(name="Skincare"), asynchronous=False)


def _create_product(category_id, name, **overrides):
    defaults = {"name": name, "base_price": 10000, "category_id": category_id}
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


def _add_variant(product_id, sku, **overrides):
    defaults = {"product_id": product_id, "name": sku, "sku": sku, "price": 1000, "stock": 0}
    defaults.update(overrides)
    return current_domain.process(AddVariant(**defaults), asynchronous=False)


def _ids(result):
    return {item["id"] for item in result["items"]}


class TestListProducts:
    def test_only_active_products(self, category_id):
        kept = _create_product(category_id, "Kept")
        retired = _create_product(category_id, "Retired")
        current_domain.process(DeactivateProduct(product_id=retired), asynchronous=False)

        assert _ids(queries.list_products()) == {kept}

    def test_filters(self, category_id):
        other_category = current_domain.process(CreateCategory(name="Haircare"), asynchronous=False)
        brand_id = current_domain.process(CreateBrand(name="Acme"), asynchronous=False)

        cheap = _create_product(category_id, "Cheap", base_price=5000, tags=json.dumps(["vegan"]))
        pricey = _create_product(category_id, "Pricey", base_price=50000, is_featured=True, brand_id=brand_id)
        elsewhere = _create_product(other_category, "Elsewhere", base_price=20000)

        assert _ids(queries.list_products(category_id=category_id)) == {cheap, pricey}
        assert _ids(queries.list_products(featured=True)) == {pricey}
        assert _ids(queries.list_products(brand_id=brand_id)) == {pricey}
        assert _ids(queries.list_products(min_price=10000)) == {pricey, elsewhere}
        assert _ids(queries.list_products(max_price=20000)) == {cheap, elsewhere}
        assert _ids(queries.list_products(tag="vegan")) == {cheap}

    def test_in_stock_counts_active_variants_only(self, category_id):
        stocked = _create_product(category_id, "Stocked")
        _add_variant(stocked, "STK-1", stock=3)
        drained = _create_product(category_id, "Drained")
        _add_variant(drained, "DRN-1", stock=0)
        hidden_stock = _add_variant(drained, "DRN-2", stock=7)
        current_domain.process(
            DeactivateVariant(product_id=drained, variant_id=hidden_stock), asynchronous=False
        )

        assert _ids(queries.list_products(in_stock=True)) == {stocked}

    def test_pagination(self, category_id):
        for index in range(5):
            _create_product(category_id, f"Product {index}")

        page = queries.list_products(page=2, limit=2)

        assert len(page["items"]) == 2
        assert page["pagination"] == {"page": 2, "limit": 2, "total": 5, "total_pages": 3}

    def test_unfiltered_listing_loads_only_the_page(self, category_id, monkeypatch):
        for index in range(3):
            _create_product(category_id, f"Product {index}")

        def load_everything(*args, **kwargs):
            raise AssertionError("listing materialized every product")

        monkeypatch.setattr(queries, "fetch_all", load_everything)

        page = queries.list_products(page=2, limit=2)

        assert len(page["items"]) == 1
        assert page["pagination"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}

    def test_tag_filter_pages_over_matches(self, category_id):
        for index in range(3):
            _create_product(category_id, f"Vegan {index}", tags=json.dumps(["vegan"]))
        _create_product(category_id, "Plain")

        page = queries.list_products(tag="vegan", page=2, limit=2)

        assert len(page["items"]) == 1
        assert page["pagination"]["total"] == 3

    def test_cards_resolve_relations_per_page(self, category_id, monkeypatch):
        brand_id = current_domain.process(CreateBrand(name="Acme"), asynchronous=False)
        _create_product(category_id, "Branded", brand_id=brand_id)
        _create_product(category_id, "Unbranded")

        def lookup_one_by_one(*args, **kwargs):
            raise AssertionError("relations fetched per product")

        monkeypatch.setattr(queries, "_get_or_none", lookup_one_by_one)

        cards = {card["name"]: card for card in queries.list_products()["items"]}

        assert cards["Branded"]["brand"]["name"] == "Acme"
        assert cards["Unbranded"]["brand"] is None
        assert {c["category"]["slug"] for c in cards.values()} == {"skincare"}

    def test_limit_is_capped(self, category_id):
        _create_product(category_id, "Only")

        page = queries.list_products(limit=1000)

        assert page["pagination"]["limit"] == queries.MAX_PAGE_SIZE

    def test_cards_carry_relations_and_derived_fields(self, category_id):
        product_id = _create_product(category_id, "Serum", base_price=280000)
        _add_variant(product_id, "SERUM-30", price=250000, stock=4)

        card = queries.list_products()["items"][0]

        assert card["id"] == product_id
        assert card["category"]["slug"] == "skincare"
        assert card["brand"] is None
        assert card["effective_price"] == 250000
        assert card["total_stock"] == 4
        assert card["has_variants"] is True


class TestGetProduct:
    def test_by_slug_and_by_id(self, category_id):
        product_id = _create_product(
            category_id, "Serum", specifications=json.dumps({"volume": "30ml"})
        )

        by_slug = queries.get_product("serum")
        by_id = queries.get_product(product_id)

        assert by_slug["id"] == by_id["id"] == product_id
        assert by_slug["specifications"] == {"volume": "30ml"}
        assert by_slug["variants"] == []

    def test_nested_specifications_round_trip(self, category_id):
        specifications = {
            "sizes": ["30ml", "50ml"],
            "dimensions": {"height": 12, "width": 4},
            "spf": 30,
        }
        _create_product(category_id, "Serum", specifications=json.dumps(specifications))

        assert queries.get_product("serum")["specifications"] == specifications

    def test_inactive_product_is_not_found(self, category_id):
        product_id = _create_product(category_id, "Serum")
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            queries.get_product("serum")
        with pytest.raises(ObjectNotFoundError):
            queries.get_product(product_id)

    def test_variants_listed_default_first(self, category_id):
        product_id = _create_product(category_id, "Serum")
        first = _add_variant(product_id, "SERUM-30")
        second = _add_variant(product_id, "SERUM-50", is_default=True)

        variants = queries.list_variants(product_id)

        assert [v["id"] for v in variants] == [second, first]


class TestGetVariant:
    def test_inactive_variant_remains_readable(self, category_id):
        product_id = _create_product(category_id, "Serum")
        variant_id = _add_variant(product_id, "SERUM-30")
        current_domain.process(
            DeactivateVariant(product_id=product_id, variant_id=variant_id), asynchronous=False
        )

        view = queries.get_variant(product_id, variant_id)

        assert view["is_active"] is False
        assert view["product"]["id"] == product_id
        assert variant_id not in {v["id"] for v in queries.list_variants(product_id)}
