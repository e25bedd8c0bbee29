"""
Stock deduction - consumption planning and guarded decrements.

Stock is never read-then-written. Each ingredient is decremented with a
single conditional UPDATE:

    UPDATE ingredient SET stock = stock - :amount
    WHERE id = :id AND stock >= :amount

so two concurrent orders cannot both take the last units; the loser sees
zero affected rows. Callers run apply_plan inside transaction.atomic() so
one shortfall rolls back every earlier decrement of the same order.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.conf import settings
from django.db.models import F
from django.utils import timezone

from apps.web.restaurant.exceptions import InsufficientStockError
from apps.web.restaurant.models import Ingredient

logger = logging.getLogger(__name__)


@dataclass
class ConsumptionPlan:
    """Net ingredient consumption of an order, keyed by ingredient id."""

    amounts: dict[int, Decimal] = field(default_factory=dict)
    names: dict[int, str] = field(default_factory=dict)

    def add(self, ingredient: Ingredient, amount: Decimal) -> None:
        """Accumulate consumption of an ingredient."""
        if amount <= 0:
            return
        current = self.amounts.get(ingredient.pk, Decimal("0"))
        self.amounts[ingredient.pk] = current + amount
        self.names[ingredient.pk] = ingredient.name

    def __bool__(self) -> bool:
        return bool(self.amounts)


def add_on_portion(ingredient: Ingredient) -> Decimal:
    """
    Stock consumed by one unit of an add-on.

    Explicit portion when configured; otherwise the default portion for
    mass/volume ingredients and one unit for counted ones.
    """
    if ingredient.add_on_portion is not None:
        return ingredient.add_on_portion
    if ingredient.is_measured:
        return settings.ADD_ON_DEFAULT_PORTION
    return Decimal("1")


def deduct(ingredient_id: int, amount: Decimal, name: str = "") -> None:
    """
    Decrement one ingredient's stock if enough is available.

    Raises:
        InsufficientStockError: If the guarded update matched no row.
    """
    updated = Ingredient.objects.filter(pk=ingredient_id, stock__gte=amount).update(
        stock=F("stock") - amount,
        updated_at=timezone.now(),
    )
    if updated:
        return

    available = (
        Ingredient.objects.filter(pk=ingredient_id)
        .values_list("stock", flat=True)
        .first()
    )
    logger.info(
        "Insufficient stock for %s (id=%s): requested %s, available %s",
        name or ingredient_id,
        ingredient_id,
        amount,
        available,
    )
    raise InsufficientStockError(name or str(ingredient_id), amount, available)


def apply_plan(plan: ConsumptionPlan) -> None:
    """
    Apply every decrement of a plan.

    Ingredients are updated in ascending id order so concurrent orders take
    row locks in the same order. Must run inside a transaction.
    """
    for ingredient_id in sorted(plan.amounts):
        deduct(ingredient_id, plan.amounts[ingredient_id], plan.names[ingredient_id])
