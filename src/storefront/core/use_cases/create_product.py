"""Use case: create a product."""

from loguru import logger

from src.storefront.entities.service.product import Product, ProductRepository


class CreateProductUseCase:
    """Create a product from primitive input and persist it.

    Depends only on the ``ProductRepository`` contract, so any adapter can be
    injected. Repository errors propagate unchanged.
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._product_repository = product_repository

    def execute(self, name: str, price: float) -> Product:
        product = Product(id=None, name=name, price=price)
        saved = self._product_repository.save(product)
        logger.info("Created product {}", saved.id)
        return saved
