"""
URL routing for the catalog and order API.

All endpoints are public and CORS-enabled; paths carry no trailing slash.
"""

from django.urls import path

from apps.web.restaurant import views

app_name = "restaurant"

urlpatterns = [
    # Storefront
    path("cardapio", views.menu, name="menu"),
    path("adicionais", views.add_on_list, name="add_on_list"),
    # Products
    path("produtos", views.product_collection, name="product_collection"),
    path("produtos/<int:product_id>", views.product_detail, name="product_detail"),
    path(
        "produtos/<int:product_id>/receita",
        views.product_recipe,
        name="product_recipe",
    ),
    path(
        "produtos/<int:product_id>/opcoes",
        views.product_options,
        name="product_options",
    ),
    # Categories
    path("categorias", views.category_collection, name="category_collection"),
    path(
        "categorias/<int:category_id>", views.category_detail, name="category_detail"
    ),
    # Ingredients
    path("ingredientes", views.ingredient_collection, name="ingredient_collection"),
    path(
        "ingredientes/<int:ingredient_id>",
        views.ingredient_detail,
        name="ingredient_detail",
    ),
    # Option groups
    path(
        "grupos_opcoes", views.option_group_collection, name="option_group_collection"
    ),
    path(
        "grupos_opcoes/<int:group_id>",
        views.option_group_detail,
        name="option_group_detail",
    ),
    path("opcoes", views.option_collection, name="option_collection"),
    path("opcoes/<int:option_id>", views.option_detail, name="option_detail"),
    # Orders
    path("pedidos", views.order_collection, name="order_collection"),
    path("pedidos/<int:order_id>/status", views.order_status, name="order_status"),
]
