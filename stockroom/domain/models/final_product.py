"""FinalProduct and Component — an assembled order and its bill of materials."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockroom.infrastructure.database import Base

STATUS_PENDING = "pending"
STATUS_DONE = "done"


class FinalProduct(Base):
    __tablename__ = "final_products"
    __table_args__ = (UniqueConstraint("code", "user_id", name="uq_final_products_code_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    code = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)

    status = Column(
        Enum(STATUS_PENDING, STATUS_DONE, name="final_product_status"),
        nullable=False,
        default=STATUS_PENDING,
    )
    order_date = Column(Date, nullable=True, index=True)
    apply_tax = Column(Boolean, nullable=False, default=True)
    profit_margin = Column(Numeric(7, 2), nullable=False, default=0)

    user_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Associations are loaded explicitly (and re-scoped to the tenant) by the repository
    currency = relationship("Currency", lazy="noload")
    client = relationship("Client", lazy="noload")
    category = relationship("Category", lazy="noload")
    components = relationship(
        "Component",
        back_populates="final_product",
        lazy="noload",
        order_by="Component.id",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<FinalProduct {self.code} - {self.name} ({self.status})>"


class Component(Base):
    __tablename__ = "components"

    id = Column(Integer, primary_key=True, autoincrement=True)
    final_product_id = Column(Integer, ForeignKey("final_products.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    length = Column(Numeric(10, 2), nullable=False)
    width = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Numeric(10, 2), nullable=False, default=1)

    # Derived on every write, never edited directly
    square_meters = Column(Numeric(14, 4), nullable=False)
    total_meters = Column(Numeric(14, 4), nullable=False)
    unit_price = Column(Numeric(14, 2), nullable=False)
    total_price = Column(Numeric(14, 2), nullable=False)

    image = Column(String(500), nullable=True)
    user_id = Column(String(255), nullable=False, index=True)

    final_product = relationship("FinalProduct", back_populates="components", lazy="noload")
    product = relationship("Product", lazy="noload")

    def __repr__(self):
        return f"<Component product={self.product_id} total={self.total_price}>"
