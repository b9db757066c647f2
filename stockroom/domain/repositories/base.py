"""
Base Repository Interface.
Defines the standard contract for tenant-scoped data access operations.
"""

from typing import TypeVar, List, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations, every call bound to one tenant."""

    tenant_id: str

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID, None when absent or owned by another tenant."""
        ...

    def list(self, skip: int = 0, limit: Optional[int] = None) -> List[T]:
        """List the tenant's entities in the repository's default order."""
        ...

    def create(self, obj_in: Any) -> T:
        """Create a new entity owned by the tenant."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        """Update an existing entity."""
        ...

    def delete(self, db_obj: T) -> None:
        """Delete an entity."""
        ...

    def exists(self, id: int) -> bool:
        """True when the tenant owns a row with this ID."""
        ...

    def count(self) -> int:
        """Number of rows the tenant owns."""
        ...
