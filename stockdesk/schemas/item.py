# stockdesk/schemas/item.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class NamedRef(ORMBase):
    name: str


class CategoryOut(ORMBase):
    id: int
    name: str


class BrandOut(ORMBase):
    id: int
    name: str


class NameCreate(BaseModel):
    name: str = Field(min_length=1)


class ItemBase(ORMBase):
    name: str = Field(min_length=1)
    model: Optional[str] = None
    specifications: Optional[str] = None
    warranty: Optional[str] = None
    price: float = Field(default=0, ge=0)
    amount: int = Field(default=0, ge=0)
    category_id: Optional[int] = None
    brand_id: Optional[int] = None


class ItemCreate(ItemBase):
    pass


# Schema for PUT requests - only the supplied fields are changed
class ItemUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = None
    specifications: Optional[str] = None
    warranty: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    amount: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None
    brand_id: Optional[int] = None


# Matches the nested shape of the item list: {"brands": {"name": ...}, "categories": {...}}
class ItemOut(ItemBase):
    id: int
    date_added: Optional[datetime] = None
    brands: Optional[NamedRef] = Field(None, validation_alias="brand")
    categories: Optional[NamedRef] = Field(None, validation_alias="category")


class ItemList(BaseModel):
    items: List[ItemOut]


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerOut(ORMBase):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
