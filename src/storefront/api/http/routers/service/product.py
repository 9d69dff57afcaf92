"""Product API router."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, StrictStr, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

from src.storefront.api.http.deps import (
    get_authenticated_user,
    get_create_product_use_case,
    get_product_repository,
    require_csrf,
)
from src.storefront.core.use_cases import CreateProductUseCase
from src.storefront.entities.service.product import Product, ProductRepository

router = APIRouter(
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(require_csrf), Depends(get_authenticated_user)],
)


class CreateProductRequest(BaseModel):
    """Validated body of ``POST /api/products``."""

    name: Annotated[
        StrictStr, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
    ]
    price: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("price", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        """Booleans are not numbers here; numeric strings still are."""
        if isinstance(value, bool):
            raise PydanticCustomError("float_type", "Input should be a valid number")
        return value


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: CreateProductRequest,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> Product:
    """Create a new product."""
    return use_case.execute(payload.name, payload.price)


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: int,
    repository: ProductRepository = Depends(get_product_repository),
) -> Product:
    """Get a product by ID."""
    product = repository.find_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
