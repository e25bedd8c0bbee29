"""Restaurant services - catalog writes, stock deduction, and order intake."""

from apps.web.restaurant.services.catalog import (
    create_product,
    delete_category,
    delete_option_group,
    replace_options,
    replace_recipe,
    save_category,
    update_product,
)
from apps.web.restaurant.services.order_intake import (
    plan_consumption,
    resolve_line,
    submit_order,
)
from apps.web.restaurant.services.stock import (
    ConsumptionPlan,
    add_on_portion,
    apply_plan,
    deduct,
)

__all__ = [
    "ConsumptionPlan",
    "add_on_portion",
    "apply_plan",
    "create_product",
    "deduct",
    "delete_category",
    "delete_option_group",
    "plan_consumption",
    "replace_options",
    "replace_recipe",
    "resolve_line",
    "save_category",
    "submit_order",
    "update_product",
]
