"""
Restaurant models - Catalog, stock, and orders.

The catalog (categories, products, ingredients, recipes, option groups) is
admin-managed. Orders are created once by checkout and only change status
afterwards. OrderItem stores a snapshot of the line because recipes and
names may change later.
"""

from decimal import Decimal

from django.db import models

from apps.web.core.models import TimeStampedModel

DEFAULT_BREAD = "Padrão"


class OptionGroup(TimeStampedModel):
    """
    Group of product options (e.g., "Sabores", "Tamanho").

    Attached to categories; each product in the category prices its options.
    """

    name = models.CharField(max_length=200)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Option(TimeStampedModel):
    """An option inside a group."""

    group = models.ForeignKey(
        OptionGroup,
        on_delete=models.CASCADE,
        related_name="options",
    )
    name = models.CharField(max_length=200)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.group.name} > {self.name}"


class Category(TimeStampedModel):
    """
    Menu category (e.g., Lanches, Porções, Bebidas).

    Controls menu order, whether add-ons are offered, and whether its
    products consume ingredient stock.
    """

    name = models.CharField(max_length=200, unique=True)
    display_order = models.IntegerField(default=0)
    allows_add_ons = models.BooleanField(default=False)
    tracks_stock = models.BooleanField(
        default=True,
        help_text="False for items not made from ingredients (e.g., bottled drinks)",
    )
    option_group = models.ForeignKey(
        OptionGroup,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="categories",
    )

    class Meta:
        ordering = ["display_order", "name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Product(TimeStampedModel):
    """
    Sellable menu item.

    Bread-tier prices replace the base price when the customer picks a
    special or baby bread.
    """

    name = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    special_bread_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
    )
    baby_bread_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
    )
    image_url = models.CharField(max_length=500, blank=True)

    class Meta:
        ordering = ["pk"]

    def __str__(self) -> str:
        return self.name

    @property
    def tracks_stock(self) -> bool:
        """Uncategorised products are stock-tracked."""
        return self.category is None or self.category.tracks_stock


class Unit(models.TextChoices):
    """Ingredient measuring unit."""

    COUNT = "un", "Unidade"
    MASS = "g", "Gramas"
    VOLUME = "ml", "Mililitros"


class BreadTier(models.TextChoices):
    """Pricing tier of a bread ingredient."""

    STANDARD = "standard", "Standard"
    SPECIAL = "special", "Special"
    BABY = "baby", "Baby"


class Ingredient(TimeStampedModel):
    """
    Stocked ingredient.

    Stock never goes below zero: enforced by a check constraint and by the
    guarded decrement in order intake.
    """

    name = models.CharField(max_length=200, unique=True)
    unit = models.CharField(max_length=2, choices=Unit.choices, default=Unit.COUNT)
    stock = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("0"),
    )

    # Add-on configuration
    is_add_on = models.BooleanField(default=False)
    add_on_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
    )
    add_on_portion = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        null=True,
        blank=True,
        help_text="Stock deducted per add-on unit (blank = default portion)",
    )

    # Bread substitution
    is_bread = models.BooleanField(default=False)
    bread_tier = models.CharField(
        max_length=20,
        choices=BreadTier.choices,
        default=BreadTier.STANDARD,
    )

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="ingredient_stock_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.stock} {self.unit})"

    @property
    def is_measured(self) -> bool:
        """Mass or volume ingredient (portioned add-ons)."""
        return self.unit in (Unit.MASS, Unit.VOLUME)


class RecipeLine(TimeStampedModel):
    """
    One ingredient of a product's bill of materials.

    quantity is consumed per unit of product sold.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="recipe_lines",
    )
    ingredient = models.ForeignKey(
        Ingredient,
        on_delete=models.CASCADE,
        related_name="recipe_lines",
    )
    quantity = models.DecimalField(max_digits=10, decimal_places=3)

    class Meta:
        ordering = ["pk"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "ingredient"],
                name="unique_recipe_ingredient_per_product",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product.name}: {self.quantity} {self.ingredient.name}"


class ProductOption(TimeStampedModel):
    """Price of an option for a specific product."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="product_options",
    )
    option = models.ForeignKey(
        Option,
        on_delete=models.CASCADE,
        related_name="product_options",
    )
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["pk"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "option"],
                name="unique_option_per_product",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product.name} > {self.option.name} ({self.price})"


class OrderStatus(models.TextChoices):
    """Order lifecycle status."""

    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    PREPARING = "preparing", "Preparing"
    READY = "ready", "Ready"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


# Allowed status transitions
STATUS_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY},
    OrderStatus.READY: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}


class DeliveryMode(models.TextChoices):
    """Order fulfillment type."""

    DELIVERY = "delivery", "Delivery"
    PICKUP = "pickup", "Retirada"


class Order(TimeStampedModel):
    """
    Customer order.

    Created atomically with its items and the stock deductions they imply.
    """

    customer_name = models.CharField(max_length=200)
    customer_phone = models.CharField(max_length=30)
    customer_address = models.TextField(blank=True)
    delivery_mode = models.CharField(
        max_length=20,
        choices=DeliveryMode.choices,
        default=DeliveryMode.DELIVERY,
    )
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    garlic_sachets = models.PositiveIntegerField(default=0)
    sauces = models.CharField(max_length=200, blank=True)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )

    class Meta:
        ordering = ["-created_at", "-pk"]
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["created_at"], name="order_created_at_idx"),
        ]

    def __str__(self) -> str:
        return f"Pedido {self.pk} - {self.customer_name}"

    def can_transition_to(self, status: str) -> bool:
        """Check whether the order may move to the given status."""
        return status in STATUS_TRANSITIONS.get(self.status, set())


class OrderItem(TimeStampedModel):
    """
    Line item in an order.

    Snapshot of the product name, bread, add-ons and notes at order time.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
        help_text="Reference to the product (for analytics)",
    )
    product_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    bread = models.CharField(max_length=200, blank=True)
    add_ons = models.JSONField(
        default=list,
        blank=True,
        help_text='Selected add-ons, e.g. ["2x Bacon"]',
    )
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["pk"]

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product_name}"
