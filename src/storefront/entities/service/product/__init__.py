"""Entity package: Product."""

from .entity import Product
from .repository import InMemoryProductRepository, ProductRepository, SqlProductRepository
from .table import ProductTable

__all__ = [
    "Product",
    "ProductRepository",
    "SqlProductRepository",
    "InMemoryProductRepository",
    "ProductTable",
]
