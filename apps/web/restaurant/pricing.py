"""
Configurator pricing rules.

The same rules the menu site applies in its customisation modal:

    line price = base price (or the bread-tier price)
               + sum(add-on price * add-on quantity)

with at most MAX_ADD_ONS_PER_ITEM add-on units per line.
"""

import re
from collections.abc import Iterable
from decimal import Decimal

from django.conf import settings

from apps.web.restaurant.exceptions import AddOnLimitError
from apps.web.restaurant.models import BreadTier, Ingredient, Product

ADD_ON_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s+(.+?)\s*$")


def parse_add_on(raw: str) -> tuple[int, str]:
    """
    Split an add-on string into (quantity, ingredient name).

    "2x Bacon" -> (2, "Bacon"); a string without the "<n>x " prefix counts once.
    """
    match = ADD_ON_PATTERN.match(raw)
    if match:
        return int(match.group(1)), match.group(2)
    return 1, raw.strip()


def count_add_ons(add_ons: Iterable[str]) -> int:
    """Total add-on units on a line."""
    return sum(parse_add_on(raw)[0] for raw in add_ons)


def check_add_on_limit(add_ons: Iterable[str]) -> None:
    """Raise AddOnLimitError when a line exceeds the add-on cap."""
    limit = settings.MAX_ADD_ONS_PER_ITEM
    count = count_add_ons(add_ons)
    if count > limit:
        raise AddOnLimitError(count, limit)


def bread_price(product: Product, bread: Ingredient | None) -> Decimal:
    """Price of the product with the chosen bread (None = default bread)."""
    if bread is not None:
        if bread.bread_tier == BreadTier.SPECIAL and product.special_bread_price:
            return product.special_bread_price
        if bread.bread_tier == BreadTier.BABY and product.baby_bread_price:
            return product.baby_bread_price
    return product.base_price


def price_line(
    product: Product,
    bread: Ingredient | None,
    add_ons: Iterable[tuple[int, Ingredient]],
) -> Decimal:
    """
    Unit price of a configured line.

    Args:
        product: The product ordered.
        bread: Chosen bread ingredient, or None for the product's default.
        add_ons: Resolved (quantity, ingredient) pairs.

    Returns:
        Unit price, quantized to cents.
    """
    price = bread_price(product, bread)
    for quantity, ingredient in add_ons:
        price += ingredient.add_on_price * quantity
    return price.quantize(Decimal("0.01"))


def garlic_sachets_total(count: int) -> Decimal:
    """Price of the garlic sachets on an order."""
    return (settings.GARLIC_SACHET_PRICE * count).quantize(Decimal("0.01"))
