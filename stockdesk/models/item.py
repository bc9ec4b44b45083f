# stockdesk/models/item.py
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from stockdesk.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)


class Brand(Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)


# Item
# A single stocked product. `amount` is the quantity on hand and is
# decremented directly when an order is placed.
class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    model = Column(String, nullable=True)
    specifications = Column(String, nullable=True)
    warranty = Column(String, nullable=True)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False, default=0)
    amount = Column(Integer, CheckConstraint("amount >= 0"), nullable=False, default=0)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    brand_id = Column(Integer, ForeignKey("brands.id", ondelete="SET NULL"), nullable=True)
    date_added = Column(DateTime, server_default=func.now())

    category = relationship("Category", lazy="joined")
    brand = relationship("Brand", lazy="joined")

    # Deleting an item keeps its logs; their item_id is set to NULL
    logs = relationship("SaleLog", back_populates="item")
