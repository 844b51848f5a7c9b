"""Tests for the single-default-variant rule on Product."""

import pytest
from catalogue.product.events import DefaultVariantChanged, VariantAdded, VariantDeactivated
from catalogue.product.product import Product
from protean.exceptions import ObjectNotFoundError, ValidationError


@pytest.fixture()
def product():
    product = Product.create(
        name="Hydrating Serum",
        slug="hydrating-serum",
        base_price=280000,
        category_id="cat-001",
    )
    product._events.clear()
    return product


def _defaults(product):
    return [v for v in product.variants if v.is_default]


class TestAddVariant:
    def test_first_variant_becomes_default(self, product):
        variant = product.add_variant(name="A", sku="VAR-A", price=100, stock=10)

        assert variant.is_default is True
        assert isinstance(product._events[0], VariantAdded)
        assert any(isinstance(e, DefaultVariantChanged) for e in product._events)

    def test_first_variant_is_default_even_when_not_requested(self, product):
        variant = product.add_variant(name="A", sku="VAR-A", price=100, is_default=False)
        assert variant.is_default is True

    def test_later_variant_is_not_default_unless_requested(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)

        assert first.is_default is True
        assert second.is_default is False

    def test_requested_default_demotes_previous(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100, stock=10)
        second = product.add_variant(name="B", sku="VAR-B", price=200, is_default=True)

        assert first.is_default is False
        assert second.is_default is True
        assert _defaults(product) == [second]


class TestDeactivateVariant:
    def test_default_is_re_elected_from_earliest_active(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)
        third = product.add_variant(name="C", sku="VAR-C", price=300)
        product._events.clear()

        product.deactivate_variant(first.id)

        assert first.is_default is False
        assert second.is_default is True
        assert third.is_default is False
        assert any(isinstance(e, VariantDeactivated) for e in product._events)
        changed = [e for e in product._events if isinstance(e, DefaultVariantChanged)]
        assert changed[0].variant_id == second.id

    def test_deactivating_non_default_keeps_default(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)

        product.deactivate_variant(second.id)

        assert first.is_default is True
        assert second.is_default is False

    def test_deactivating_last_variant_leaves_no_default(self, product):
        only = product.add_variant(name="A", sku="VAR-A", price=100)

        product.deactivate_variant(only.id)

        assert _defaults(product) == []
        assert product.default_variant is None

    def test_already_inactive_is_rejected(self, product):
        only = product.add_variant(name="A", sku="VAR-A", price=100)
        product.deactivate_variant(only.id)

        with pytest.raises(ValidationError):
            product.deactivate_variant(only.id)

    def test_unknown_variant(self, product):
        with pytest.raises(ObjectNotFoundError):
            product.deactivate_variant("missing")


class TestSetDefaultVariant:
    def test_promotes_and_demotes(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)

        product.set_default_variant(second.id)

        assert _defaults(product) == [second]
        assert first.is_default is False

    def test_inactive_variant_cannot_be_default(self, product):
        product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)
        product.deactivate_variant(second.id)

        with pytest.raises(ValidationError):
            product.set_default_variant(second.id)

    def test_setting_current_default_is_a_no_op(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        product._events.clear()

        product.set_default_variant(first.id)

        assert first.is_default is True
        assert product._events == []


class TestUpdateVariant:
    def test_updates_fields(self, product):
        variant = product.add_variant(name="A", sku="VAR-A", price=100, stock=1)

        product.update_variant(variant.id, price=150, stock=7, color="Red")

        assert (variant.price, variant.stock, variant.color) == (150, 7, "Red")

    def test_promoting_through_update(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)

        product.update_variant(second.id, is_default=True)

        assert _defaults(product) == [second]
        assert first.is_default is False

    def test_demoting_default_hands_over_to_earliest_sibling(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)

        product.update_variant(first.id, is_default=False)

        assert first.is_default is False
        assert second.is_default is True

    def test_only_active_variant_must_stay_default(self, product):
        only = product.add_variant(name="A", sku="VAR-A", price=100)

        with pytest.raises(ValidationError):
            product.update_variant(only.id, is_default=False)
        assert only.is_default is True

    def test_deactivating_through_update_re_elects(self, product):
        first = product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)

        product.update_variant(first.id, is_active=False)

        assert first.is_active is False
        assert second.is_default is True

    def test_reactivated_variant_becomes_default_when_none_exists(self, product):
        only = product.add_variant(name="A", sku="VAR-A", price=100)
        product.deactivate_variant(only.id)

        product.update_variant(only.id, is_active=True)

        assert only.is_active is True
        assert only.is_default is True

    def test_cannot_deactivate_and_promote_at_once(self, product):
        product.add_variant(name="A", sku="VAR-A", price=100)
        second = product.add_variant(name="B", sku="VAR-B", price=200)

        with pytest.raises(ValidationError):
            product.update_variant(second.id, is_active=False, is_default=True)
