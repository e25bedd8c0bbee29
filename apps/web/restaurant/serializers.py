"""
Pydantic schemas for the public API.

Field names are English; wire names (aliases) are the Portuguese keys the
menu site sends and reads. Dump with ``by_alias=True``.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ApiSchema(BaseModel):
    """Base schema: accepts field names or wire aliases, reads ORM objects."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


# =============================================================================
# Catalog
# =============================================================================


class CategorySummarySchema(ApiSchema):
    """Category as embedded in a product."""

    id: int
    name: str = Field(alias="nome")
    display_order: int = Field(alias="ordem")
    allows_add_ons: bool = Field(alias="permite_adicionais")
    tracks_stock: bool = Field(alias="controla_estoque")
    option_group_id: int | None = Field(default=None, alias="grupo_opcoes_id")


class CategorySchema(CategorySummarySchema):
    """A menu category."""


class CategoryWriteSchema(ApiSchema):
    """Request body for POST/PUT /api/categorias."""

    name: str = Field(..., min_length=1, max_length=200, alias="nome")
    display_order: int = Field(default=0, alias="ordem")
    allows_add_ons: bool = Field(default=False, alias="permite_adicionais")
    tracks_stock: bool = Field(default=True, alias="controla_estoque")
    option_group_id: int | None = Field(default=None, alias="grupo_opcoes_id")


class ProductSchema(ApiSchema):
    """A product with its category."""

    id: int
    name: str = Field(alias="nome")
    description: str = Field(alias="descricao")
    base_price: Decimal = Field(alias="preco_base")
    category_id: int | None = Field(alias="categoria_id")
    special_bread_price: Decimal | None = Field(alias="preco_pao_especial")
    baby_bread_price: Decimal | None = Field(alias="preco_pao_baby")
    image_url: str = Field(alias="imagem_url")
    category: CategorySummarySchema | None = Field(alias="categorias")


class RecipeLineWriteSchema(ApiSchema):
    """One recipe ingredient in a product write."""

    ingredient_id: int = Field(alias="ingrediente_id")
    quantity: Decimal = Field(..., gt=0, alias="quantidade_usada")


class ProductOptionWriteSchema(ApiSchema):
    """One option price in a product write."""

    option_id: int = Field(alias="opcao_id")
    price: Decimal = Field(..., ge=0, alias="preco")


class ProductWriteSchema(ApiSchema):
    """
    Request body for POST/PUT /api/produtos.

    On PUT the recipe and option prices are replaced wholesale.
    """

    name: str = Field(..., min_length=1, max_length=200, alias="nome")
    description: str = Field(default="", alias="descricao")
    base_price: Decimal = Field(..., ge=0, alias="preco_base")
    category_id: int | None = Field(default=None, alias="categoria_id")
    special_bread_price: Decimal | None = Field(
        default=None, ge=0, alias="preco_pao_especial"
    )
    baby_bread_price: Decimal | None = Field(default=None, ge=0, alias="preco_pao_baby")
    image_url: str = Field(default="", max_length=500, alias="imagem_url")
    recipe: list[RecipeLineWriteSchema] = Field(default_factory=list, alias="receita")
    options: list[ProductOptionWriteSchema] = Field(
        default_factory=list, alias="opcoes"
    )

    @model_validator(mode="after")
    def check_unique_ingredients(self) -> "ProductWriteSchema":
        ids = [line.ingredient_id for line in self.recipe]
        if len(ids) != len(set(ids)):
            msg = "Each ingredient may appear only once in a recipe"
            raise ValueError(msg)
        return self


class IngredientRefSchema(ApiSchema):
    """Ingredient name/unit as embedded in a recipe line."""

    name: str = Field(alias="nome")
    unit: str = Field(alias="unidade")


class RecipeLineSchema(ApiSchema):
    """A recipe line for GET /api/produtos/{id}/receita."""

    id: int
    ingredient_id: int = Field(alias="ingrediente_id")
    quantity: Decimal = Field(alias="quantidade_usada")
    ingredient: IngredientRefSchema = Field(alias="ingredientes")


class IngredientSchema(ApiSchema):
    """An ingredient with stock and add-on settings."""

    id: int
    name: str = Field(alias="nome")
    unit: str = Field(alias="unidade")
    stock: Decimal = Field(alias="quantidade_estoque")
    is_add_on: bool = Field(alias="adicional")
    add_on_price: Decimal = Field(alias="preco_adicional")
    add_on_portion: Decimal | None = Field(alias="porcao_adicional")
    is_bread: bool = Field(alias="pao")
    bread_tier: str = Field(alias="tipo_pao")


class IngredientWriteSchema(ApiSchema):
    """Request body for POST/PUT /api/ingredientes."""

    name: str = Field(..., min_length=1, max_length=200, alias="nome")
    unit: Literal["un", "g", "ml"] = Field(default="un", alias="unidade")
    stock: Decimal = Field(default=Decimal("0"), ge=0, alias="quantidade_estoque")
    is_add_on: bool = Field(default=False, alias="adicional")
    add_on_price: Decimal = Field(default=Decimal("0"), ge=0, alias="preco_adicional")
    add_on_portion: Decimal | None = Field(default=None, gt=0, alias="porcao_adicional")
    is_bread: bool = Field(default=False, alias="pao")
    bread_tier: Literal["standard", "special", "baby"] = Field(
        default="standard", alias="tipo_pao"
    )


class OptionSchema(ApiSchema):
    """An option inside a group."""

    id: int
    name: str = Field(alias="nome")
    group_id: int = Field(alias="grupo_id")


class OptionGroupSchema(ApiSchema):
    """An option group with its options."""

    id: int
    name: str = Field(alias="nome")
    options: list[OptionSchema] = Field(default_factory=list, alias="opcoes")


class OptionGroupWriteSchema(ApiSchema):
    """Request body for POST /api/grupos_opcoes."""

    name: str = Field(..., min_length=1, max_length=200, alias="nome")


class OptionWriteSchema(ApiSchema):
    """Request body for POST /api/opcoes."""

    name: str = Field(..., min_length=1, max_length=200, alias="nome")
    group_id: int = Field(alias="grupo_id")


class PricedOptionSchema(ApiSchema):
    """An option with the product-specific price."""

    id: int
    name: str = Field(alias="nome")
    price: Decimal = Field(alias="preco")


class ProductOptionsResponse(ApiSchema):
    """Response for GET /api/produtos/{id}/opcoes."""

    group_name: str = Field(alias="grupo_nome")
    options: list[PricedOptionSchema] = Field(alias="opcoes")


# =============================================================================
# Menu
# =============================================================================


class MenuSectionSchema(ApiSchema):
    """A category section of the rendered menu."""

    id: int | None
    name: str = Field(alias="nome")
    display_order: int = Field(alias="ordem")
    allows_add_ons: bool = Field(alias="permite_adicionais")
    products: list[ProductSchema] = Field(default_factory=list, alias="produtos")


class MenuResponse(ApiSchema):
    """Response for GET /api/cardapio."""

    sections: list[MenuSectionSchema] = Field(alias="categorias")
    add_ons: list[IngredientSchema] = Field(alias="adicionais")


# =============================================================================
# Orders
# =============================================================================


class OrderItemCreateSchema(ApiSchema):
    """
    A cart line as stored by the menu site.

    ``id`` is preferred for product lookup; ``name`` is the fallback.
    """

    product_id: int | None = Field(default=None, alias="id")
    product_name: str = Field(default="", max_length=200, alias="name")
    quantity: int = Field(default=1, ge=1, le=99)
    unit_price: Decimal | None = Field(default=None, ge=0, alias="price")
    bread: str | None = Field(default=None, max_length=200)
    add_ons: list[str] = Field(default_factory=list, alias="extras")
    notes: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_product_reference(self) -> "OrderItemCreateSchema":
        if self.product_id is None and not self.product_name.strip():
            msg = "Item needs a product id or name"
            raise ValueError(msg)
        return self


class OrderCreateRequest(ApiSchema):
    """Request body for POST /api/pedidos."""

    customer_name: str = Field(..., min_length=1, max_length=200, alias="cliente_nome")
    customer_phone: str = Field(
        ..., min_length=1, max_length=30, alias="cliente_telefone"
    )
    customer_address: str | None = Field(default=None, alias="cliente_endereco")
    delivery_mode: Literal["delivery", "pickup"] = Field(
        default="delivery", alias="tipo_entrega"
    )
    total: Decimal | None = Field(default=None, ge=0, alias="valor_total")
    items: list[OrderItemCreateSchema] = Field(default_factory=list, alias="itens")
    garlic_sachets: int = Field(default=0, ge=0, le=99, alias="saches_alho")
    sauces: str | None = Field(default=None, max_length=200, alias="molhos")

    @model_validator(mode="after")
    def check_order(self) -> "OrderCreateRequest":
        address = (self.customer_address or "").strip()
        if self.delivery_mode == "delivery" and not address:
            msg = "Delivery address is required for delivery orders"
            raise ValueError(msg)
        if not self.items and self.garlic_sachets == 0:
            msg = "Order has no items"
            raise ValueError(msg)
        return self


class OrderCreateResponse(ApiSchema):
    """Response for POST /api/pedidos."""

    message: str
    order_id: int = Field(alias="pedidoId")


class OrderItemResponseSchema(ApiSchema):
    """A line item in an order response."""

    id: int
    product_id: int | None = Field(alias="produto_id")
    product_name: str = Field(alias="nome_produto")
    quantity: int = Field(alias="quantidade")
    unit_price: Decimal = Field(alias="preco_unitario")
    bread: str = Field(alias="pao")
    add_ons: list[Any] = Field(alias="adicionais")
    notes: str = Field(alias="observacoes")


class OrderSchema(ApiSchema):
    """An order with nested items for GET /api/pedidos."""

    id: int
    customer_name: str = Field(alias="cliente_nome")
    customer_phone: str = Field(alias="cliente_telefone")
    customer_address: str = Field(alias="cliente_endereco")
    delivery_mode: str = Field(alias="tipo_entrega")
    total_amount: Decimal = Field(alias="valor_total")
    garlic_sachets: int = Field(alias="saches_alho")
    sauces: str = Field(alias="molhos")
    status: str
    created_at: datetime = Field(alias="criado_em")
    items: list[OrderItemResponseSchema] = Field(alias="itens")


class OrderStatusUpdateRequest(ApiSchema):
    """Request body for PUT /api/pedidos/{id}/status."""

    status: Literal[
        "pending", "confirmed", "preparing", "ready", "completed", "cancelled"
    ]


class ValidationErrorDetail(BaseModel):
    """A single validation error."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: str
    details: list[ValidationErrorDetail]
