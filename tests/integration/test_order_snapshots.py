"""Order lines keep the catalogue data they were placed with.

The storefront builds cart lines from catalogue reads, and the order
stores a copy. Later catalogue changes must not reach past orders.
"""

import json

from catalogue.brand.management import CreateBrand, DeactivateBrand
from catalogue.category.management import CreateCategory, DeactivateCategory
from catalogue.product import queries as product_queries
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.lifecycle import DeactivateProduct
from catalogue.product.variants import AddVariant, DeactivateVariant
from ordering.order import queries as order_queries
from ordering.order.placement import PlaceOrder


def _stock_catalogue(catalogue):
    with catalogue.domain_context():
        category_id = catalogue.process(CreateCategory(name="Skincare"), asynchronous=False)
        brand_id = catalogue.process(CreateBrand(name="Acme"), asynchronous=False)
        product_id = catalogue.process(
            CreateProduct(
                name="Hydrating Serum",
                base_price=280000,
                category_id=category_id,
                brand_id=brand_id,
            ),
            asynchronous=False,
        )
        variant_id = catalogue.process(
            AddVariant(product_id=product_id, name="30ml", sku="SERUM-30", price=250000, stock=5),
            asynchronous=False,
        )
        return product_queries.get_product(product_id), variant_id


def _place_order(ordering, product, variant_id):
    variant = next(v for v in product["variants"] if v["id"] == variant_id)
    line = {
        "product_id": product["id"],
        "product_name": product["name"],
        "variant_id": variant["id"],
        "variant_name": variant["name"],
        "sku": variant["sku"],
        "price": variant["price"],
        "quantity": 2,
        "image": product["primary_image"],
    }
    with ordering.domain_context():
        return ordering.process(
            PlaceOrder(
                items=json.dumps([line]),
                total=500000,
                customer_name="Sara Ahmadi",
                customer_phone="09120000000",
                shipping_address="No. 12, Example St.",
            ),
            asynchronous=False,
        )


def _ordered_line(ordering, order_id):
    with ordering.domain_context():
        return order_queries.get_order(order_id)["items"][0]


class TestOrderSnapshots:
    def test_deactivating_product_leaves_order_untouched(self, _catalogue_domain, _ordering_domain):
        product, variant_id = _stock_catalogue(_catalogue_domain)
        order_id = _place_order(_ordering_domain, product, variant_id)

        with _catalogue_domain.domain_context():
            _catalogue_domain.process(DeactivateProduct(product_id=product["id"]), asynchronous=False)

        with _ordering_domain.domain_context():
            item = order_queries.get_order(order_id)["items"][0]

        assert item["product_name"] == "Hydrating Serum"
        assert item["price"] == 250000
        assert item["total"] == 500000

    def test_catalogue_edits_do_not_rewrite_lines(self, _catalogue_domain, _ordering_domain):
        product, variant_id = _stock_catalogue(_catalogue_domain)
        order_id = _place_order(_ordering_domain, product, variant_id)

        with _catalogue_domain.domain_context():
            _catalogue_domain.process(
                UpdateProduct(product_id=product["id"], name="Serum v2", base_price=1),
                asynchronous=False,
            )
            _catalogue_domain.process(
                DeactivateVariant(product_id=product["id"], variant_id=variant_id),
                asynchronous=False,
            )
            # Inactive variants stay resolvable for order history
            variant = product_queries.get_variant(product["id"], variant_id)

        with _ordering_domain.domain_context():
            item = order_queries.get_order(order_id)["items"][0]

        assert variant["is_active"] is False
        assert item["product_name"] == "Hydrating Serum"
        assert item["variant_name"] == "30ml"
        assert item["sku"] == "SERUM-30"

    def test_deactivating_category_leaves_order_untouched(self, _catalogue_domain, _ordering_domain):
        product, variant_id = _stock_catalogue(_catalogue_domain)
        order_id = _place_order(_ordering_domain, product, variant_id)
        before = _ordered_line(_ordering_domain, order_id)

        with _catalogue_domain.domain_context():
            _catalogue_domain.process(
                DeactivateCategory(category_id=product["category_id"]), asynchronous=False
            )

        assert _ordered_line(_ordering_domain, order_id) == before
        assert before["product_name"] == "Hydrating Serum"
        assert before["total"] == 500000

    def test_deactivating_brand_leaves_order_untouched(self, _catalogue_domain, _ordering_domain):
        product, variant_id = _stock_catalogue(_catalogue_domain)
        order_id = _place_order(_ordering_domain, product, variant_id)
        before = _ordered_line(_ordering_domain, order_id)

        with _catalogue_domain.domain_context():
            _catalogue_domain.process(DeactivateBrand(brand_id=product["brand_id"]), asynchronous=False)

        assert _ordered_line(_ordering_domain, order_id) == before
        assert before["sku"] == "SERUM-30"
        assert before["price"] == 250000
