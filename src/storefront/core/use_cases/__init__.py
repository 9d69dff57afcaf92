"""Application use cases."""

from .create_product import CreateProductUseCase

__all__ = ["CreateProductUseCase"]
