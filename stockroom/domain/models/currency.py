"""Currency — display symbol for prices. No conversion is ever performed."""

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from stockroom.infrastructure.database import Base


class Currency(Base):
    __tablename__ = "currencies"
    __table_args__ = (UniqueConstraint("code", "user_id", name="uq_currencies_code_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(3), nullable=False)
    name = Column(String(255), nullable=False)
    symbol = Column(String(10), nullable=False)
    user_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Currency {self.code}>"
