"""Tests for configurator pricing rules."""

from decimal import Decimal

import pytest

from apps.web.restaurant.exceptions import AddOnLimitError
from apps.web.restaurant.models import BreadTier, Ingredient, Product
from apps.web.restaurant.pricing import (
    bread_price,
    check_add_on_limit,
    count_add_ons,
    garlic_sachets_total,
    parse_add_on,
    price_line,
)


@pytest.fixture
def burger() -> Product:
    return Product(
        name="X-Bacon",
        base_price=Decimal("25.00"),
        special_bread_price=Decimal("28.00"),
        baby_bread_price=Decimal("20.00"),
    )


class TestParseAddOn:
    """Tests for parse_add_on."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2x Bacon", (2, "Bacon")),
            ("1x Queijo Cheddar", (1, "Queijo Cheddar")),
            ("10X Ovo", (10, "Ovo")),
            ("  3x  Cebola Caramelizada ", (3, "Cebola Caramelizada")),
            ("Bacon", (1, "Bacon")),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_add_on(raw) == expected

    def test_count_sums_quantities(self):
        assert count_add_ons(["2x Bacon", "Ovo", "3x Cheddar"]) == 6


class TestAddOnLimit:
    """Tests for check_add_on_limit."""

    def test_at_limit_is_allowed(self, settings):
        settings.MAX_ADD_ONS_PER_ITEM = 10

        check_add_on_limit(["5x Bacon", "5x Ovo"])

    def test_over_limit_raises(self, settings):
        settings.MAX_ADD_ONS_PER_ITEM = 10

        with pytest.raises(AddOnLimitError) as exc_info:
            check_add_on_limit(["6x Bacon", "5x Ovo"])

        assert exc_info.value.count == 11
        assert exc_info.value.limit == 10


class TestBreadPrice:
    """Tests for bread_price."""

    def test_default_bread_uses_base_price(self, burger):
        assert bread_price(burger, None) == Decimal("25.00")

    def test_special_bread_uses_special_price(self, burger):
        brioche = Ingredient(
            name="Brioche", is_bread=True, bread_tier=BreadTier.SPECIAL
        )

        assert bread_price(burger, brioche) == Decimal("28.00")

    def test_baby_bread_uses_baby_price(self, burger):
        baby = Ingredient(name="Pão Baby", is_bread=True, bread_tier=BreadTier.BABY)

        assert bread_price(burger, baby) == Decimal("20.00")

    def test_tier_without_price_falls_back_to_base(self, burger):
        burger.special_bread_price = None
        brioche = Ingredient(
            name="Brioche", is_bread=True, bread_tier=BreadTier.SPECIAL
        )

        assert bread_price(burger, brioche) == Decimal("25.00")

    def test_standard_tier_bread_uses_base_price(self, burger):
        australian = Ingredient(
            name="Pão Australiano", is_bread=True, bread_tier=BreadTier.STANDARD
        )

        assert bread_price(burger, australian) == Decimal("25.00")


class TestPriceLine:
    """Tests for price_line."""

    def test_base_plus_add_ons(self, burger):
        bacon = Ingredient(name="Bacon", add_on_price=Decimal("4.00"))
        egg = Ingredient(name="Ovo", add_on_price=Decimal("2.50"))

        price = price_line(burger, None, [(2, bacon), (1, egg)])

        assert price == Decimal("35.50")

    def test_bread_tier_plus_add_ons(self, burger):
        brioche = Ingredient(
            name="Brioche", is_bread=True, bread_tier=BreadTier.SPECIAL
        )
        bacon = Ingredient(name="Bacon", add_on_price=Decimal("4.00"))

        assert price_line(burger, brioche, [(1, bacon)]) == Decimal("32.00")

    def test_no_add_ons(self, burger):
        assert price_line(burger, None, []) == Decimal("25.00")


def test_garlic_sachets_total(settings):
    settings.GARLIC_SACHET_PRICE = Decimal("1.00")

    assert garlic_sachets_total(3) == Decimal("3.00")
    assert garlic_sachets_total(0) == Decimal("0.00")
