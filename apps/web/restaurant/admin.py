"""Admin registration for restaurant models."""

from django.contrib import admin

from apps.web.restaurant.models import (
    Category,
    Ingredient,
    Option,
    OptionGroup,
    Order,
    OrderItem,
    Product,
    ProductOption,
    RecipeLine,
)


class RecipeLineInline(admin.TabularInline):
    """Inline for recipe lines within a product."""

    model = RecipeLine
    extra = 0
    fields = ["ingredient", "quantity"]
    autocomplete_fields = ["ingredient"]


class ProductOptionInline(admin.TabularInline):
    """Inline for option prices within a product."""

    model = ProductOption
    extra = 0
    fields = ["option", "price"]


class OptionInline(admin.TabularInline):
    """Inline for options within a group."""

    model = Option
    extra = 0
    fields = ["name"]


class OrderItemInline(admin.TabularInline):
    """Inline for items within an order."""

    model = OrderItem
    extra = 0
    fields = ["product_name", "quantity", "unit_price", "bread", "add_ons", "notes"]
    readonly_fields = [
        "product_name",
        "quantity",
        "unit_price",
        "bread",
        "add_ons",
        "notes",
    ]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin for menu categories."""

    list_display = [
        "name",
        "display_order",
        "allows_add_ons",
        "tracks_stock",
        "option_group",
    ]
    list_filter = ["allows_add_ons", "tracks_stock"]
    search_fields = ["name"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin for products."""

    list_display = ["name", "category", "base_price", "tracks_stock"]
    list_filter = ["category"]
    search_fields = ["name", "description"]
    inlines = [RecipeLineInline, ProductOptionInline]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = [
        (None, {"fields": ["name", "description", "category", "image_url"]}),
        (
            "Pricing",
            {"fields": ["base_price", "special_bread_price", "baby_bread_price"]},
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    """Admin for ingredients and stock."""

    list_display = ["name", "unit", "stock", "is_add_on", "add_on_price", "is_bread"]
    list_filter = ["unit", "is_add_on", "is_bread"]
    search_fields = ["name"]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = [
        (None, {"fields": ["name", "unit", "stock"]}),
        ("Add-on", {"fields": ["is_add_on", "add_on_price", "add_on_portion"]}),
        ("Bread", {"fields": ["is_bread", "bread_tier"]}),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]


@admin.register(OptionGroup)
class OptionGroupAdmin(admin.ModelAdmin):
    """Admin for option groups."""

    list_display = ["name"]
    search_fields = ["name"]
    inlines = [OptionInline]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for orders."""

    list_display = [
        "pk",
        "customer_name",
        "status",
        "delivery_mode",
        "total_amount",
        "created_at",
    ]
    list_filter = ["status", "delivery_mode"]
    search_fields = ["customer_name", "customer_phone"]
    inlines = [OrderItemInline]
    readonly_fields = ["created_at", "updated_at"]
    date_hierarchy = "created_at"

    fieldsets = [
        (
            "Customer",
            {"fields": ["customer_name", "customer_phone", "customer_address"]},
        ),
        (
            "Order Details",
            {"fields": ["status", "delivery_mode", "garlic_sachets", "sauces"]},
        ),
        ("Pricing", {"fields": ["total_amount"]}),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]
