"""
FinalProduct Repository Interface.
Defines the aggregate operations for FinalProducts and their Components.
"""

from typing import List, Optional

from stockroom.domain.repositories.base import BaseRepository
from stockroom.domain.models.final_product import Component, FinalProduct
from stockroom.domain.models.product import Product
from stockroom.domain.schemas.final_product import FinalProductFilter


class FinalProductRepository(BaseRepository[FinalProduct]):
    """Interface for FinalProduct aggregate operations."""

    def get_with_relations(self, id: int) -> Optional[FinalProduct]:
        """Get the full graph: currency, client, category, components → product → currency."""
        ...

    def get_with_filters(self, filters: FinalProductFilter) -> List[FinalProduct]:
        """List full graphs, newest first."""
        ...

    def get_product_for_update(self, product_id: int) -> Optional[Product]:
        """Load a component's product inside the current transaction."""
        ...

    def replace_components(self, final_product: FinalProduct, components: List[Component]) -> None:
        """Delete every existing component row and stage the new ones (no commit)."""
        ...

    def delete_components(self, final_product: FinalProduct) -> int:
        """Delete the aggregate's components (no commit)."""
        ...

    def add(self, final_product: FinalProduct) -> FinalProduct:
        """Stage a new aggregate root owned by the tenant (flush, no commit)."""
        ...

    def delete_aggregate(self, final_product: FinalProduct) -> None:
        """Delete components first, then the root (no commit)."""
        ...
