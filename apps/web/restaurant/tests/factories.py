"""Factory classes for restaurant models."""

from decimal import Decimal

import factory

from apps.web.restaurant.models import (
    BreadTier,
    Category,
    DeliveryMode,
    Ingredient,
    Option,
    OptionGroup,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    ProductOption,
    RecipeLine,
    Unit,
)


class OptionGroupFactory(factory.django.DjangoModelFactory):
    """Factory for OptionGroup model."""

    class Meta:
        model = OptionGroup

    name = factory.Sequence(lambda n: f"Group {n}")


class OptionFactory(factory.django.DjangoModelFactory):
    """Factory for Option model."""

    class Meta:
        model = Option

    group = factory.SubFactory(OptionGroupFactory)
    name = factory.Sequence(lambda n: f"Option {n}")


class CategoryFactory(factory.django.DjangoModelFactory):
    """Factory for Category model."""

    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    display_order = factory.Sequence(lambda n: n)
    allows_add_ons = False
    tracks_stock = True


class ProductFactory(factory.django.DjangoModelFactory):
    """Factory for Product model."""

    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("sentence")
    base_price = Decimal("20.00")
    category = factory.SubFactory(CategoryFactory)


class IngredientFactory(factory.django.DjangoModelFactory):
    """Factory for Ingredient model."""

    class Meta:
        model = Ingredient

    name = factory.Sequence(lambda n: f"Ingredient {n}")
    unit = Unit.COUNT
    stock = Decimal("100")


class AddOnFactory(IngredientFactory):
    """Add-on-eligible ingredient."""

    is_add_on = True
    add_on_price = Decimal("4.00")


class BreadFactory(IngredientFactory):
    """Bread ingredient."""

    name = factory.Sequence(lambda n: f"Bread {n}")
    is_bread = True
    bread_tier = BreadTier.STANDARD


class RecipeLineFactory(factory.django.DjangoModelFactory):
    """Factory for RecipeLine model."""

    class Meta:
        model = RecipeLine

    product = factory.SubFactory(ProductFactory)
    ingredient = factory.SubFactory(IngredientFactory)
    quantity = Decimal("1")


class ProductOptionFactory(factory.django.DjangoModelFactory):
    """Factory for ProductOption model."""

    class Meta:
        model = ProductOption

    product = factory.SubFactory(ProductFactory)
    option = factory.SubFactory(OptionFactory)
    price = Decimal("5.00")


class OrderFactory(factory.django.DjangoModelFactory):
    """Factory for Order model."""

    class Meta:
        model = Order

    customer_name = factory.Faker("name")
    customer_phone = "11999990000"
    customer_address = "Rua das Flores, 10"
    delivery_mode = DeliveryMode.DELIVERY
    total_amount = Decimal("20.00")
    status = OrderStatus.PENDING


class OrderItemFactory(factory.django.DjangoModelFactory):
    """Factory for OrderItem model."""

    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    product_name = factory.LazyAttribute(lambda obj: obj.product.name)
    quantity = 1
    unit_price = Decimal("20.00")
