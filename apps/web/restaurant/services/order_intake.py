"""
Order intake - turns a submitted cart into an order.

Handles:
1. Resolving each cart line's product, bread and add-ons
2. Planning ingredient consumption (recipe x quantity, bread swap, add-ons)
3. Applying guarded stock decrements
4. Pricing lines server-side and persisting Order + OrderItems

Everything runs in one transaction: any error leaves stock and orders
untouched.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import transaction

from apps.web.restaurant.exceptions import (
    AddOnsNotAllowedError,
    BreadNotFoundError,
    ProductNotFoundError,
)
from apps.web.restaurant.models import (
    DEFAULT_BREAD,
    Ingredient,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    RecipeLine,
)
from apps.web.restaurant.pricing import (
    check_add_on_limit,
    garlic_sachets_total,
    parse_add_on,
    price_line,
)
from apps.web.restaurant.serializers import OrderCreateRequest, OrderItemCreateSchema
from apps.web.restaurant.services.stock import (
    ConsumptionPlan,
    add_on_portion,
    apply_plan,
)

logger = logging.getLogger(__name__)


@dataclass
class ResolvedLine:
    """A cart line with its catalog objects loaded."""

    item: OrderItemCreateSchema
    product: Product
    recipe: list[RecipeLine]
    bread: Ingredient | None = None
    add_ons: list[tuple[int, Ingredient]] = field(default_factory=list)

    @property
    def unit_price(self) -> Decimal:
        return price_line(self.product, self.bread, self.add_ons)


def resolve_product(item: OrderItemCreateSchema) -> Product:
    """
    Find the product for a cart line.

    Stable ids are preferred; the display name is only a fallback for
    carts saved before ids were sent.
    """
    products = Product.objects.select_related("category")
    if item.product_id is not None:
        product = products.filter(pk=item.product_id).first()
        if product is None:
            raise ProductNotFoundError(item.product_id)
        return product

    product = products.filter(name=item.product_name.strip()).first()
    if product is None:
        raise ProductNotFoundError(item.product_name)
    return product


def resolve_bread(
    bread_name: str | None, recipe: list[RecipeLine]
) -> Ingredient | None:
    """
    Resolve the chosen bread.

    Returns None when the line keeps the recipe's default bread.

    Raises:
        BreadNotFoundError: If the name is not a bread ingredient.
    """
    name = (bread_name or "").strip()
    if not name or name == DEFAULT_BREAD:
        return None

    bread = Ingredient.objects.filter(name=name, is_bread=True).first()
    if bread is None:
        raise BreadNotFoundError(name)

    default_breads = {
        line.ingredient_id for line in recipe if line.ingredient.is_bread
    }
    if bread.pk in default_breads:
        return None
    return bread


def resolve_add_ons(raw_add_ons: list[str]) -> list[tuple[int, Ingredient]]:
    """
    Resolve add-on strings to ingredients.

    Only add-on-eligible ingredients match. Unknown names and ingredients
    not offered as add-ons are logged and dropped: they neither deduct
    stock nor fail the order.
    """
    resolved: list[tuple[int, Ingredient]] = []
    for raw in raw_add_ons:
        quantity, name = parse_add_on(raw)
        if quantity <= 0:
            continue
        ingredient = Ingredient.objects.filter(name=name, is_add_on=True).first()
        if ingredient is None:
            logger.warning("Unknown add-on '%s' skipped", raw)
            continue
        resolved.append((quantity, ingredient))
    return resolved


def resolve_line(item: OrderItemCreateSchema) -> ResolvedLine:
    """Load product, recipe, bread and add-ons for one cart line."""
    check_add_on_limit(item.add_ons)

    product = resolve_product(item)
    add_ons = resolve_add_ons(item.add_ons)
    if add_ons and not (product.category and product.category.allows_add_ons):
        raise AddOnsNotAllowedError(product.name)

    recipe = list(product.recipe_lines.select_related("ingredient"))
    return ResolvedLine(
        item=item,
        product=product,
        recipe=recipe,
        bread=resolve_bread(item.bread, recipe),
        add_ons=add_ons,
    )


def plan_consumption(lines: list[ResolvedLine]) -> ConsumptionPlan:
    """
    Compute net ingredient consumption for the resolved lines.

    - Categories that do not track stock contribute nothing.
    - Recipe quantities are multiplied by the line quantity.
    - A non-default bread replaces the recipe's bread ingredients with one
      unit of the chosen bread per product.
    - Add-ons consume their portion times add-on quantity times line quantity.
    """
    plan = ConsumptionPlan()

    for line in lines:
        if not line.product.tracks_stock:
            continue

        quantity = Decimal(line.item.quantity)

        for recipe_line in line.recipe:
            if line.bread is not None and recipe_line.ingredient.is_bread:
                continue
            plan.add(recipe_line.ingredient, recipe_line.quantity * quantity)

        if line.bread is not None:
            plan.add(line.bread, quantity)

        for add_on_quantity, ingredient in line.add_ons:
            portion = add_on_portion(ingredient)
            plan.add(ingredient, portion * add_on_quantity * quantity)

    return plan


def submit_order(order_request: OrderCreateRequest) -> Order:
    """
    Create an order and deduct the stock it consumes.

    This is the main entry point for checkout. It:
    1. Resolves every line (product, recipe, bread, add-ons)
    2. Applies the guarded stock decrements
    3. Prices lines and computes the total
    4. Inserts the Order and its OrderItems

    Args:
        order_request: Validated request body.

    Returns:
        The created Order.

    Raises:
        OrderIntakeError: For client-correctable problems (unknown product
            or bread, add-on rules, insufficient stock). Nothing is persisted.
    """
    with transaction.atomic():
        lines = [resolve_line(item) for item in order_request.items]

        plan = plan_consumption(lines)
        apply_plan(plan)

        priced = [(line, line.unit_price) for line in lines]
        total = sum(
            (unit_price * line.item.quantity for line, unit_price in priced),
            Decimal("0"),
        ) + garlic_sachets_total(order_request.garlic_sachets)

        if order_request.total is not None and order_request.total != total:
            logger.warning(
                "Order total mismatch: client sent %s, computed %s",
                order_request.total,
                total,
            )

        order = Order.objects.create(
            customer_name=order_request.customer_name.strip(),
            customer_phone=order_request.customer_phone.strip(),
            customer_address=(order_request.customer_address or "").strip(),
            delivery_mode=order_request.delivery_mode,
            total_amount=total,
            garlic_sachets=order_request.garlic_sachets,
            sauces=order_request.sauces or "",
            status=OrderStatus.PENDING,
        )

        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    product=line.product,
                    product_name=line.product.name,
                    quantity=line.item.quantity,
                    unit_price=unit_price,
                    bread=(line.item.bread or "").strip(),
                    add_ons=list(line.item.add_ons),
                    notes=line.item.notes or "",
                )
                for line, unit_price in priced
            ]
        )

    logger.info(
        "Order %s created: %d line(s), total %s, %d ingredient(s) deducted",
        order.pk,
        len(lines),
        total,
        len(plan.amounts),
    )
    return order
