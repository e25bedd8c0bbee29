"""Tests for restaurant models."""

from decimal import Decimal

from django.db import IntegrityError, transaction

import pytest

from apps.web.restaurant.models import (
    Category,
    Ingredient,
    OrderStatus,
    Product,
    ProductOption,
    RecipeLine,
    Unit,
)

from .factories import (
    CategoryFactory,
    IngredientFactory,
    OptionFactory,
    OrderFactory,
    OrderItemFactory,
    ProductFactory,
    ProductOptionFactory,
    RecipeLineFactory,
)


@pytest.mark.django_db
class TestCategory:
    """Tests for Category model."""

    def test_categories_ordered_by_display_order(self) -> None:
        CategoryFactory(name="Bebidas", display_order=3)
        CategoryFactory(name="Lanches", display_order=1)
        CategoryFactory(name="Porções", display_order=2)

        names = list(Category.objects.values_list("name", flat=True))
        assert names == ["Lanches", "Porções", "Bebidas"]

    def test_category_name_unique(self) -> None:
        CategoryFactory(name="Lanches")

        with pytest.raises(IntegrityError):
            CategoryFactory(name="Lanches")


@pytest.mark.django_db
class TestProduct:
    """Tests for Product model."""

    def test_tracks_stock_follows_category(self) -> None:
        drinks = CategoryFactory(tracks_stock=False)
        product = ProductFactory(category=drinks)

        assert product.tracks_stock is False

    def test_uncategorised_product_tracks_stock(self) -> None:
        product = ProductFactory(category=None)

        assert product.tracks_stock is True

    def test_deleting_category_keeps_product(self) -> None:
        category = CategoryFactory()
        product = ProductFactory(category=category)

        category.delete()
        product.refresh_from_db()

        assert product.category is None

    def test_deleting_product_deletes_recipe(self) -> None:
        line = RecipeLineFactory()
        product_id = line.product.pk

        line.product.delete()

        assert not Product.objects.filter(pk=product_id).exists()
        assert not RecipeLine.objects.filter(pk=line.pk).exists()


@pytest.mark.django_db
class TestIngredient:
    """Tests for Ingredient model."""

    def test_is_measured(self) -> None:
        assert IngredientFactory(unit=Unit.MASS).is_measured is True
        assert IngredientFactory(unit=Unit.VOLUME).is_measured is True
        assert IngredientFactory(unit=Unit.COUNT).is_measured is False

    def test_stock_cannot_go_negative(self) -> None:
        ingredient = IngredientFactory(stock=Decimal("1"))

        with pytest.raises(IntegrityError), transaction.atomic():
            Ingredient.objects.filter(pk=ingredient.pk).update(stock=Decimal("-1"))

        ingredient.refresh_from_db()
        assert ingredient.stock == Decimal("1")


@pytest.mark.django_db
class TestRecipeLine:
    """Tests for RecipeLine model."""

    def test_ingredient_once_per_product(self) -> None:
        line = RecipeLineFactory()

        with pytest.raises(IntegrityError):
            RecipeLineFactory(product=line.product, ingredient=line.ingredient)


@pytest.mark.django_db
class TestProductOption:
    """Tests for ProductOption model."""

    def test_option_once_per_product(self) -> None:
        product_option = ProductOptionFactory()

        with pytest.raises(IntegrityError):
            ProductOptionFactory(
                product=product_option.product, option=product_option.option
            )

    def test_deleting_option_deletes_prices(self) -> None:
        option = OptionFactory()
        option_id = option.pk
        ProductOptionFactory(option=option)

        option.delete()

        assert not ProductOption.objects.filter(option_id=option_id).exists()


@pytest.mark.django_db
class TestOrder:
    """Tests for Order model."""

    def test_new_order_is_pending(self) -> None:
        order = OrderFactory()

        assert order.status == OrderStatus.PENDING

    @pytest.mark.parametrize(
        ("current", "target", "allowed"),
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED, True),
            (OrderStatus.PENDING, OrderStatus.CANCELLED, True),
            (OrderStatus.PENDING, OrderStatus.READY, False),
            (OrderStatus.CONFIRMED, OrderStatus.PREPARING, True),
            (OrderStatus.PREPARING, OrderStatus.CANCELLED, False),
            (OrderStatus.READY, OrderStatus.COMPLETED, True),
            (OrderStatus.COMPLETED, OrderStatus.PENDING, False),
            (OrderStatus.CANCELLED, OrderStatus.CONFIRMED, False),
        ],
    )
    def test_status_transitions(self, current, target, allowed) -> None:
        order = OrderFactory(status=current)

        assert order.can_transition_to(target) is allowed

    def test_items_snapshot_survives_product_delete(self) -> None:
        item = OrderItemFactory(product_name="Cheeseburger")

        item.product.delete()
        item.refresh_from_db()

        assert item.product is None
        assert item.product_name == "Cheeseburger"
        assert item.add_ons == []
