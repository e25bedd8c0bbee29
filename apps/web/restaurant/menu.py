"""
Menu grouping for the storefront.

Products are grouped by category in display order; products without a
category are listed last under "Sem Categoria".
"""

from collections.abc import Iterable

from apps.web.restaurant.models import Ingredient, Product
from apps.web.restaurant.serializers import (
    IngredientSchema,
    MenuResponse,
    MenuSectionSchema,
    ProductSchema,
)

UNCATEGORIZED = "Sem Categoria"
UNCATEGORIZED_ORDER = 99


def group_menu(
    products: Iterable[Product], add_ons: Iterable[Ingredient]
) -> MenuResponse:
    """
    Build the menu payload.

    Args:
        products: Products with their category loaded.
        add_ons: Add-on-eligible ingredients offered in the configurator.
    """
    sections: dict[int | None, MenuSectionSchema] = {}

    for product in products:
        category = product.category
        key = category.pk if category else None
        section = sections.get(key)
        if section is None:
            section = MenuSectionSchema(
                id=key,
                name=category.name if category else UNCATEGORIZED,
                display_order=(
                    category.display_order if category else UNCATEGORIZED_ORDER
                ),
                allows_add_ons=category.allows_add_ons if category else False,
            )
            sections[key] = section
        section.products.append(ProductSchema.model_validate(product))

    ordered = sorted(
        sections.values(),
        key=lambda s: (s.id is None, s.display_order, s.name),
    )
    return MenuResponse(
        sections=ordered,
        add_ons=[IngredientSchema.model_validate(i) for i in add_ons],
    )
