"""
Pytest configuration for Django app tests.
"""

from decimal import Decimal

from django.core.cache import cache
from django.test import Client as DjangoClient

import pytest

from apps.web.restaurant.models import BreadTier, Unit
from apps.web.restaurant.tests.factories import (
    AddOnFactory,
    BreadFactory,
    CategoryFactory,
    IngredientFactory,
    ProductFactory,
    RecipeLineFactory,
)


@pytest.fixture(autouse=True)
def clear_cache():
    """Idempotency replays live in the cache; start every test empty."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client() -> DjangoClient:
    """Django test client for API requests."""
    return DjangoClient()


@pytest.fixture
def burger_catalog(db) -> dict:
    """
    A small burger shop catalog.

    Cheeseburger = 1 bun + 150 g beef + 1 cheese slice, with stock
    bun=10, beef=500 g, cheese=5. Bacon is a 30 g add-on; Brioche is a
    special-tier bread.
    """
    burgers = CategoryFactory(name="Lanches", display_order=1, allows_add_ons=True)
    drinks = CategoryFactory(name="Bebidas", display_order=3, tracks_stock=False)

    bun = BreadFactory(name="Pão de Hambúrguer", stock=Decimal("10"))
    brioche = BreadFactory(
        name="Pão Brioche", stock=Decimal("10"), bread_tier=BreadTier.SPECIAL
    )
    beef = IngredientFactory(name="Carne", unit=Unit.MASS, stock=Decimal("500"))
    cheese = IngredientFactory(name="Queijo", stock=Decimal("5"))
    bacon = AddOnFactory(
        name="Bacon",
        unit=Unit.MASS,
        stock=Decimal("1000"),
        add_on_price=Decimal("4.00"),
    )

    cheeseburger = ProductFactory(
        name="Cheeseburger",
        category=burgers,
        base_price=Decimal("25.00"),
        special_bread_price=Decimal("28.00"),
    )
    RecipeLineFactory(product=cheeseburger, ingredient=bun, quantity=Decimal("1"))
    RecipeLineFactory(product=cheeseburger, ingredient=beef, quantity=Decimal("150"))
    RecipeLineFactory(product=cheeseburger, ingredient=cheese, quantity=Decimal("1"))

    soda = ProductFactory(
        name="Refrigerante", category=drinks, base_price=Decimal("6.00")
    )

    return {
        "burgers": burgers,
        "drinks": drinks,
        "bun": bun,
        "brioche": brioche,
        "beef": beef,
        "cheese": cheese,
        "bacon": bacon,
        "cheeseburger": cheeseburger,
        "soda": soda,
    }
