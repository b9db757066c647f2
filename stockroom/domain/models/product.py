"""Product domain model — maps to the 'products' table."""

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockroom.infrastructure.database import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (UniqueConstraint("barcode", "user_id", name="uq_products_barcode_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=False)
    barcode = Column(String(255), nullable=False)
    price_per_square_meter = Column(Numeric(14, 2), nullable=False)
    square_meters = Column(Numeric(14, 4), nullable=False, default=0)
    description = Column(Text, nullable=True)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), nullable=True, index=True)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True, index=True)

    user_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("Category", lazy="noload")
    brand = relationship("Brand", lazy="noload")
    currency = relationship("Currency", lazy="noload")

    def __repr__(self):
        return f"<Product {self.barcode} - {self.name}>"
