"""Order intake exceptions."""

from decimal import Decimal


class OrderIntakeError(Exception):
    """Base exception for client-correctable order errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProductNotFoundError(OrderIntakeError):
    """A cart line references a product that does not exist."""

    def __init__(self, reference: str | int) -> None:
        super().__init__(f"Product not found: {reference}")
        self.reference = reference


class BreadNotFoundError(OrderIntakeError):
    """The chosen bread is not a known bread ingredient."""

    def __init__(self, bread: str) -> None:
        super().__init__(f"Bread not found: {bread}")
        self.bread = bread


class AddOnsNotAllowedError(OrderIntakeError):
    """Add-ons were sent for a product whose category does not offer them."""

    def __init__(self, product_name: str) -> None:
        super().__init__(f"Add-ons are not available for '{product_name}'")
        self.product_name = product_name


class AddOnLimitError(OrderIntakeError):
    """A line carries more add-on units than the configurator allows."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"At most {limit} add-ons per item (got {count})")
        self.count = count
        self.limit = limit


class InsufficientStockError(OrderIntakeError):
    """A guarded stock decrement matched no row."""

    def __init__(
        self,
        ingredient_name: str,
        requested: Decimal,
        available: Decimal | None = None,
    ) -> None:
        super().__init__(f"Insufficient stock: {ingredient_name}")
        self.ingredient_name = ingredient_name
        self.requested = requested
        self.available = available
