# shop/schemas.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Optional, List

PRODUCT_REQUIRED_MESSAGE = "Product id is required."
MIN_QUANTITY_MESSAGE = "At least 1 item must be added."


# User
class UserBase(BaseModel):
    email: EmailStr
    full_name: str

class UserCreate(UserBase):
    password: str = Field(..., min_length=8)

class UserOut(UserBase):
    id: int
    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    email: EmailStr
    password: str


# Cart
class CartItemRequest(BaseModel):
    """Body of POST /cart. The owner comes from the token, never from here."""
    product_id: Optional[int] = Field(None, validate_default=True)
    quantity: Optional[int] = Field(None, validate_default=True)

    @field_validator("product_id")
    @classmethod
    def _product_required(cls, v):
        if v is None:
            raise PydanticCustomError("product_required", PRODUCT_REQUIRED_MESSAGE)
        return v

    @field_validator("quantity")
    @classmethod
    def _at_least_one(cls, v):
        if v is None or v < 1:
            raise PydanticCustomError("quantity_min", MIN_QUANTITY_MESSAGE)
        return v


class CartDetail(BaseModel):
    cart_item_id: int
    product_id: int
    product_name: str
    price: float
    quantity: int
    image_url: Optional[str] = None


class CartOrderItem(BaseModel):
    cart_item_id: int


class CartOrderRequest(BaseModel):
    cart_order_list: Optional[List[CartOrderItem]] = None
