"""
Catalog writes that touch more than one table.

Product writes replace the recipe and option prices wholesale (delete,
then bulk insert); they are never diffed or patched line by line.
"""

import logging

from django.db import transaction

from apps.web.restaurant.models import (
    Category,
    OptionGroup,
    Product,
    ProductOption,
    RecipeLine,
)
from apps.web.restaurant.serializers import (
    CategoryWriteSchema,
    ProductOptionWriteSchema,
    ProductWriteSchema,
    RecipeLineWriteSchema,
)

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = [
    "name",
    "description",
    "base_price",
    "category_id",
    "special_bread_price",
    "baby_bread_price",
    "image_url",
]

CATEGORY_FIELDS = [
    "name",
    "display_order",
    "allows_add_ons",
    "tracks_stock",
    "option_group_id",
]


def replace_recipe(product: Product, recipe: list[RecipeLineWriteSchema]) -> None:
    """Delete all recipe lines of a product, then insert the new set."""
    RecipeLine.objects.filter(product=product).delete()
    RecipeLine.objects.bulk_create(
        [
            RecipeLine(
                product=product,
                ingredient_id=line.ingredient_id,
                quantity=line.quantity,
            )
            for line in recipe
        ]
    )


def replace_options(
    product: Product, options: list[ProductOptionWriteSchema]
) -> None:
    """Delete all option prices of a product, then insert the new set."""
    ProductOption.objects.filter(product=product).delete()
    ProductOption.objects.bulk_create(
        [
            ProductOption(product=product, option_id=opt.option_id, price=opt.price)
            for opt in options
        ]
    )


def create_product(data: ProductWriteSchema) -> Product:
    """Create a product with its recipe and option prices."""
    with transaction.atomic():
        product = Product.objects.create(
            **{name: getattr(data, name) for name in PRODUCT_FIELDS}
        )
        replace_recipe(product, data.recipe)
        replace_options(product, data.options)

    logger.info("Product %s created (%s)", product.pk, product.name)
    return product


def update_product(product: Product, data: ProductWriteSchema) -> Product:
    """Update a product and replace its recipe and option prices."""
    with transaction.atomic():
        for name in PRODUCT_FIELDS:
            setattr(product, name, getattr(data, name))
        product.save()
        replace_recipe(product, data.recipe)
        replace_options(product, data.options)

    logger.info(
        "Product %s updated: %d recipe line(s), %d option(s)",
        product.pk,
        len(data.recipe),
        len(data.options),
    )
    return product


def save_category(
    data: CategoryWriteSchema, category: Category | None = None
) -> Category:
    """Create or update a category."""
    category = category or Category()
    for name in CATEGORY_FIELDS:
        setattr(category, name, getattr(data, name))
    category.save()
    return category


def delete_category(category: Category) -> int:
    """
    Delete a category, detaching its products instead of deleting them.

    Returns:
        Number of products left without a category.
    """
    with transaction.atomic():
        detached = Product.objects.filter(category=category).update(category=None)
        category.delete()

    logger.info(
        "Category %s deleted, %d product(s) detached", category.name, detached
    )
    return detached


def delete_option_group(group: OptionGroup) -> None:
    """Delete an option group, detaching it from categories."""
    with transaction.atomic():
        Category.objects.filter(option_group=group).update(option_group=None)
        group.delete()
