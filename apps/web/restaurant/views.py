"""
Catalog and Order API views - Public endpoints for the menu site.

These endpoints are used by:
- The storefront: menu/add-on fetch at page load, order submission at checkout
- The admin page: catalog CRUD and order status updates
"""

import json
import logging
from typing import Any, TypeVar

from django.db import IntegrityError, transaction
from django.db.models import F
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.cache import cache_control
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.decorators import idempotent
from apps.web.core.http import (
    error_response,
    json_response,
    no_content,
    options_response,
)
from apps.web.restaurant.exceptions import OrderIntakeError
from apps.web.restaurant.menu import group_menu
from apps.web.restaurant.models import (
    Category,
    Ingredient,
    Option,
    OptionGroup,
    Order,
    Product,
)
from apps.web.restaurant.serializers import (
    CategorySchema,
    CategoryWriteSchema,
    IngredientSchema,
    IngredientWriteSchema,
    OptionGroupSchema,
    OptionGroupWriteSchema,
    OptionSchema,
    OptionWriteSchema,
    OrderCreateRequest,
    OrderCreateResponse,
    OrderItemResponseSchema,
    OrderSchema,
    OrderStatusUpdateRequest,
    PricedOptionSchema,
    ProductOptionsResponse,
    ProductSchema,
    ProductWriteSchema,
    RecipeLineSchema,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from apps.web.restaurant.services import (
    create_product,
    delete_category,
    delete_option_group,
    save_category,
    submit_order,
    update_product,
)

logger = logging.getLogger(__name__)

_S = TypeVar("_S", bound=BaseModel)

INGREDIENT_FIELDS = [
    "name",
    "unit",
    "stock",
    "is_add_on",
    "add_on_price",
    "add_on_portion",
    "is_bread",
    "bread_tier",
]


def _dump(schema: BaseModel) -> dict[str, Any]:
    """Serialize a schema with its wire (alias) names."""
    return schema.model_dump(mode="json", by_alias=True)


def _validation_error(details: list[ValidationErrorDetail]) -> JsonResponse:
    """400 response listing validation problems."""
    summary = "; ".join(
        f"{d.field}: {d.message}" if d.field else d.message for d in details
    )
    response = ValidationErrorResponse(
        error=f"Invalid request: {summary}", details=details
    )
    return json_response(response.model_dump(), status=400)


def _parse_body(request: HttpRequest, schema: type[_S]) -> _S | JsonResponse:
    """
    Parse and validate a JSON request body.

    Returns the validated schema, or a 400 response to send back as is.
    """
    try:
        body = json.loads(request.body or b"{}")
        return schema.model_validate(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response("Invalid JSON in request body")
    except PydanticValidationError as e:
        return _validation_error(
            [
                ValidationErrorDetail(
                    field=".".join(str(loc) for loc in err["loc"]),
                    message=err["msg"],
                )
                for err in e.errors()
            ]
        )


def _missing_reference(field: str, label: str, pk: int) -> ValidationErrorDetail:
    return ValidationErrorDetail(field=field, message=f"{label} {pk} not found")


def _get_or_404(queryset: Any, pk: int, label: str) -> Any:
    """Fetch a row by primary key or raise Http404."""
    try:
        return queryset.get(pk=pk)
    except queryset.model.DoesNotExist as exc:
        raise Http404(f"{label} {pk} not found") from exc


# =============================================================================
# Health & Menu
# =============================================================================


@require_GET
def health(_request: HttpRequest) -> JsonResponse:
    """
    GET /

    Liveness check.
    """
    return json_response({"message": "Servidor da Mayara Burguer's está no ar!"})


@require_GET
@cache_control(max_age=60, public=True)
def menu(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/cardapio

    Products grouped by category plus the add-on list, in one payload.

    Cache: 1 minute
    """
    products = Product.objects.select_related("category")
    add_ons = Ingredient.objects.filter(is_add_on=True).order_by("name")
    return json_response(_dump(group_menu(products, add_ons)))


# =============================================================================
# Products
# =============================================================================


def _product_queryset() -> Any:
    return Product.objects.select_related("category").order_by(
        F("category__display_order").asc(nulls_last=True), "pk"
    )


def _check_product_references(data: ProductWriteSchema) -> list[ValidationErrorDetail]:
    """Check the category, ingredients and options a product write refers to."""
    errors: list[ValidationErrorDetail] = []

    if (
        data.category_id is not None
        and not Category.objects.filter(pk=data.category_id).exists()
    ):
        errors.append(
            _missing_reference("categoria_id", "Category", data.category_id)
        )

    ingredient_ids = {line.ingredient_id for line in data.recipe}
    known = set(
        Ingredient.objects.filter(pk__in=ingredient_ids).values_list("pk", flat=True)
    )
    for i, line in enumerate(data.recipe):
        if line.ingredient_id not in known:
            errors.append(
                _missing_reference(
                    f"receita.{i}.ingrediente_id", "Ingredient", line.ingredient_id
                )
            )

    option_ids = {opt.option_id for opt in data.options}
    known = set(Option.objects.filter(pk__in=option_ids).values_list("pk", flat=True))
    for i, opt in enumerate(data.options):
        if opt.option_id not in known:
            errors.append(
                _missing_reference(f"opcoes.{i}.opcao_id", "Option", opt.option_id)
            )

    return errors


def _save_product(request: HttpRequest, product: Product | None) -> JsonResponse:
    """Validate a product body and create or update the product."""
    data = _parse_body(request, ProductWriteSchema)
    if isinstance(data, JsonResponse):
        return data

    errors = _check_product_references(data)
    if errors:
        return _validation_error(errors)

    try:
        if product is None:
            product = create_product(data)
            return json_response(
                {"id": product.pk, "message": "Produto criado!"}, status=201
            )
        update_product(product, data)
    except IntegrityError:
        logger.warning("Duplicate name rejected: %s", data.name)
        return error_response(f"A product named '{data.name}' already exists")

    return json_response({"id": product.pk, "message": "Produto atualizado!"})


@csrf_exempt
@require_http_methods(["GET", "POST", "OPTIONS"])
def product_collection(request: HttpRequest) -> HttpResponse:
    """
    GET /api/produtos - products with their category, in menu order
    POST /api/produtos - create a product with recipe and option prices
    """
    if request.method == "OPTIONS":
        return options_response()
    if request.method == "POST":
        return _save_product(request, None)

    products = [_dump(ProductSchema.model_validate(p)) for p in _product_queryset()]
    return json_response(products)


@csrf_exempt
@require_http_methods(["PUT", "DELETE", "OPTIONS"])
def product_detail(request: HttpRequest, product_id: int) -> HttpResponse:
    """
    PUT /api/produtos/{id} - update; recipe and option prices are replaced
    DELETE /api/produtos/{id} - delete with its recipe and option prices
    """
    if request.method == "OPTIONS":
        return options_response()

    product = _get_or_404(Product.objects.all(), product_id, "Product")

    if request.method == "PUT":
        return _save_product(request, product)

    product.delete()
    logger.info("Product %s deleted", product_id)
    return no_content()


@require_GET
def product_recipe(_request: HttpRequest, product_id: int) -> JsonResponse:
    """
    GET /api/produtos/{id}/receita

    Recipe lines of a product with ingredient name and unit.
    """
    product = _get_or_404(Product.objects.all(), product_id, "Product")
    lines = product.recipe_lines.select_related("ingredient")
    return json_response(
        [_dump(RecipeLineSchema.model_validate(line)) for line in lines]
    )


@require_GET
def product_options(_request: HttpRequest, product_id: int) -> JsonResponse:
    """
    GET /api/produtos/{id}/opcoes

    Priced options of the product's category group, or null when the
    category has no option group.
    """
    product = _get_or_404(
        Product.objects.select_related("category__option_group"),
        product_id,
        "Product",
    )
    category = product.category
    if category is None or category.option_group is None:
        return json_response(None)

    group = category.option_group
    priced = product.product_options.select_related("option").filter(
        option__group=group
    )
    response = ProductOptionsResponse(
        group_name=group.name,
        options=[
            PricedOptionSchema(id=po.option.pk, name=po.option.name, price=po.price)
            for po in priced
        ],
    )
    return json_response(_dump(response))


# =============================================================================
# Categories
# =============================================================================


def _save_category_view(
    request: HttpRequest, category: Category | None
) -> JsonResponse:
    data = _parse_body(request, CategoryWriteSchema)
    if isinstance(data, JsonResponse):
        return data

    if (
        data.option_group_id is not None
        and not OptionGroup.objects.filter(pk=data.option_group_id).exists()
    ):
        return _validation_error(
            [
                _missing_reference(
                    "grupo_opcoes_id", "Option group", data.option_group_id
                )
            ]
        )

    created = category is None
    try:
        with transaction.atomic():
            category = save_category(data, category)
    except IntegrityError:
        logger.warning("Duplicate name rejected: %s", data.name)
        return error_response(f"A category named '{data.name}' already exists")

    return json_response(
        _dump(CategorySchema.model_validate(category)),
        status=201 if created else 200,
    )


@csrf_exempt
@require_http_methods(["GET", "POST", "OPTIONS"])
def category_collection(request: HttpRequest) -> HttpResponse:
    """
    GET /api/categorias - categories in display order
    POST /api/categorias - create a category
    """
    if request.method == "OPTIONS":
        return options_response()
    if request.method == "POST":
        return _save_category_view(request, None)

    categories = Category.objects.order_by("display_order", "name")
    return json_response([_dump(CategorySchema.model_validate(c)) for c in categories])


@csrf_exempt
@require_http_methods(["PUT", "DELETE", "OPTIONS"])
def category_detail(request: HttpRequest, category_id: int) -> HttpResponse:
    """
    PUT /api/categorias/{id} - update a category
    DELETE /api/categorias/{id} - delete; its products lose the category
    """
    if request.method == "OPTIONS":
        return options_response()

    category = _get_or_404(Category.objects.all(), category_id, "Category")

    if request.method == "PUT":
        return _save_category_view(request, category)

    delete_category(category)
    return no_content()


# =============================================================================
# Ingredients / Stock
# =============================================================================


def _save_ingredient(
    request: HttpRequest, ingredient: Ingredient | None
) -> JsonResponse:
    data = _parse_body(request, IngredientWriteSchema)
    if isinstance(data, JsonResponse):
        return data

    created = ingredient is None
    ingredient = ingredient or Ingredient()
    for name in INGREDIENT_FIELDS:
        setattr(ingredient, name, getattr(data, name))

    try:
        with transaction.atomic():
            ingredient.save()
    except IntegrityError:
        logger.warning("Duplicate name rejected: %s", data.name)
        return error_response(f"An ingredient named '{data.name}' already exists")

    return json_response(
        _dump(IngredientSchema.model_validate(ingredient)),
        status=201 if created else 200,
    )


@csrf_exempt
@require_http_methods(["GET", "POST", "OPTIONS"])
def ingredient_collection(request: HttpRequest) -> HttpResponse:
    """
    GET /api/ingredientes - all ingredients with stock
    POST /api/ingredientes - create an ingredient
    """
    if request.method == "OPTIONS":
        return options_response()
    if request.method == "POST":
        return _save_ingredient(request, None)

    ingredients = Ingredient.objects.order_by("name")
    return json_response(
        [_dump(IngredientSchema.model_validate(i)) for i in ingredients]
    )


@csrf_exempt
@require_http_methods(["PUT", "DELETE", "OPTIONS"])
def ingredient_detail(request: HttpRequest, ingredient_id: int) -> HttpResponse:
    """
    PUT /api/ingredientes/{id} - update an ingredient (including stock)
    DELETE /api/ingredientes/{id} - delete; removes it from recipes
    """
    if request.method == "OPTIONS":
        return options_response()

    ingredient = _get_or_404(Ingredient.objects.all(), ingredient_id, "Ingredient")

    if request.method == "PUT":
        return _save_ingredient(request, ingredient)

    ingredient.delete()
    logger.info("Ingredient %s deleted", ingredient_id)
    return no_content()


@require_GET
def add_on_list(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/adicionais

    Add-on-eligible ingredients, by name.
    """
    add_ons = Ingredient.objects.filter(is_add_on=True).order_by("name")
    return json_response([_dump(IngredientSchema.model_validate(i)) for i in add_ons])


# =============================================================================
# Option groups
# =============================================================================


def _serialize_option_group(group: OptionGroup) -> OptionGroupSchema:
    """Serialize an OptionGroup with nested options."""
    return OptionGroupSchema(
        id=group.pk,
        name=group.name,
        options=[OptionSchema.model_validate(o) for o in group.options.all()],
    )


@csrf_exempt
@require_http_methods(["GET", "POST", "OPTIONS"])
def option_group_collection(request: HttpRequest) -> HttpResponse:
    """
    GET /api/grupos_opcoes - groups with their options
    POST /api/grupos_opcoes - create a group
    """
    if request.method == "OPTIONS":
        return options_response()

    if request.method == "POST":
        data = _parse_body(request, OptionGroupWriteSchema)
        if isinstance(data, JsonResponse):
            return data
        group = OptionGroup.objects.create(name=data.name)
        return json_response(_dump(_serialize_option_group(group)), status=201)

    groups = OptionGroup.objects.prefetch_related("options").order_by("name")
    return json_response([_dump(_serialize_option_group(g)) for g in groups])


@csrf_exempt
@require_http_methods(["DELETE", "OPTIONS"])
def option_group_detail(request: HttpRequest, group_id: int) -> HttpResponse:
    """
    DELETE /api/grupos_opcoes/{id}

    Deletes the group and its options; categories lose the group.
    """
    if request.method == "OPTIONS":
        return options_response()

    group = _get_or_404(OptionGroup.objects.all(), group_id, "Option group")
    delete_option_group(group)
    return no_content()


@csrf_exempt
@require_http_methods(["POST", "OPTIONS"])
def option_collection(request: HttpRequest) -> HttpResponse:
    """
    POST /api/opcoes

    Create an option inside a group.
    """
    if request.method == "OPTIONS":
        return options_response()

    data = _parse_body(request, OptionWriteSchema)
    if isinstance(data, JsonResponse):
        return data

    if not OptionGroup.objects.filter(pk=data.group_id).exists():
        return _validation_error(
            [_missing_reference("grupo_id", "Option group", data.group_id)]
        )

    option = Option.objects.create(name=data.name, group_id=data.group_id)
    return json_response(_dump(OptionSchema.model_validate(option)), status=201)


@csrf_exempt
@require_http_methods(["DELETE", "OPTIONS"])
def option_detail(request: HttpRequest, option_id: int) -> HttpResponse:
    """
    DELETE /api/opcoes/{id}
    """
    if request.method == "OPTIONS":
        return options_response()

    option = _get_or_404(Option.objects.all(), option_id, "Option")
    option.delete()
    return no_content()


# =============================================================================
# Orders
# =============================================================================


def _serialize_order(order: Order) -> OrderSchema:
    """Serialize an Order with nested items."""
    return OrderSchema(
        id=order.pk,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        customer_address=order.customer_address,
        delivery_mode=order.delivery_mode,
        total_amount=order.total_amount,
        garlic_sachets=order.garlic_sachets,
        sauces=order.sauces,
        status=order.status,
        created_at=order.created_at,
        items=[OrderItemResponseSchema.model_validate(i) for i in order.items.all()],
    )


def _create_order(request: HttpRequest) -> JsonResponse:
    """
    Validate a cart and hand it to order intake.

    Business errors come back as 400 with the intake message; anything else
    is logged and reported as a generic 500. Intake has already rolled back
    in both cases.
    """
    order_request = _parse_body(request, OrderCreateRequest)
    if isinstance(order_request, JsonResponse):
        return order_request

    try:
        order = submit_order(order_request)
    except OrderIntakeError as e:
        logger.info("Order rejected: %s", e.message)
        return error_response(e.message)
    except Exception:
        logger.exception("Unexpected failure while registering an order")
        return error_response(
            "Internal error while registering the order", status=500
        )

    response = OrderCreateResponse(
        message="Pedido registrado com sucesso!", order_id=order.pk
    )
    return json_response(_dump(response), status=201)


@csrf_exempt
@require_http_methods(["GET", "POST", "OPTIONS"])
@idempotent
def order_collection(request: HttpRequest) -> HttpResponse:
    """
    GET /api/pedidos - orders, newest first, with items
    POST /api/pedidos - submit a cart; deducts stock atomically

    Request body: OrderCreateRequest schema
    Response: OrderCreateResponse schema (201), {"error"} (400/500)
    """
    if request.method == "OPTIONS":
        return options_response()
    if request.method == "POST":
        return _create_order(request)

    orders = Order.objects.prefetch_related("items").order_by("-created_at", "-pk")
    return json_response([_dump(_serialize_order(o)) for o in orders])


@csrf_exempt
@require_http_methods(["PUT", "OPTIONS"])
def order_status(request: HttpRequest, order_id: int) -> HttpResponse:
    """
    PUT /api/pedidos/{id}/status

    Move an order to a new status (e.g., pending -> confirmed).
    """
    if request.method == "OPTIONS":
        return options_response()

    order = _get_or_404(Order.objects.all(), order_id, "Order")

    data = _parse_body(request, OrderStatusUpdateRequest)
    if isinstance(data, JsonResponse):
        return data

    if not order.can_transition_to(data.status):
        return error_response(
            f"Cannot change order from '{order.status}' to '{data.status}'"
        )

    order.status = data.status
    order.save(update_fields=["status", "updated_at"])
    logger.info("Order %s moved to %s", order.pk, order.status)

    return json_response(
        {"message": "Status atualizado!", "id": order.pk, "status": order.status}
    )
