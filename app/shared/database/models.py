from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.config.database import Base
from app.shared.database.types import UTCDateTime

# ===== CATALOG =====

class Category(Base):
    """Product category"""
    __tablename__ = "category"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)

    # Relationships
    products = relationship("Product", back_populates="category")

class Product(Base):
    """Sellable product; stock is decremented by checkout under an exclusive lock"""
    __tablename__ = "product"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    price = Column(Integer, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    category_id = Column(Integer, ForeignKey("category.id"), nullable=True)

    # Relationships
    category = relationship("Category", back_populates="products")

    @property
    def category_name(self):
        return self.category.name if self.category else None

    @property
    def category_description(self):
        return self.category.description if self.category else None

# ===== SALES =====

class Transaction(Base):
    """Sale record written once by checkout, never updated"""
    __tablename__ = "transaction"

    id = Column(Integer, primary_key=True, index=True)
    total_amount = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, index=True)

    __table_args__ = (
        Index("idx_transaction_created_at_id", "created_at", "id"),
    )

    # Relationships
    details = relationship(
        "TransactionDetail",
        back_populates="transaction",
        order_by="TransactionDetail.id",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

class TransactionDetail(Base):
    """
    Sale line. Name, description and price are snapshots taken at checkout,
    so later catalog edits never change history. product_id is not a foreign
    key for the same reason.
    """
    __tablename__ = "transaction_detail"

    id = Column(Integer, primary_key=True, index=True)
    transaction_id = Column(
        Integer,
        ForeignKey("transaction.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id = Column(Integer, nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    product_description = Column(Text, nullable=False, default="")
    unit_price = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_transaction_detail_transaction_product_name", "transaction_id", "product_name"),
    )

    # Relationships
    transaction = relationship("Transaction", back_populates="details")
