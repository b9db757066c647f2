"""
Product Repository Interface.
Defines specific data access operations for Products.
"""

from typing import List, Optional

from stockroom.domain.repositories.base import BaseRepository
from stockroom.domain.models.product import Product
from stockroom.domain.models.final_product import FinalProduct
from stockroom.domain.schemas.product import ProductFilter


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def get_with_relations(self, id: int) -> Optional[Product]:
        """Get a product with its currency, brand and category joined."""
        ...

    def get_with_filters(self, filters: ProductFilter) -> List[Product]:
        """Search/filter products, newest first."""
        ...

    def get_referencing_final_products(self, product_id: int) -> List[FinalProduct]:
        """Final products whose bill of materials uses the product."""
        ...
