# shop/cart_service.py
import logging
from typing import List

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .database import get_session
from .exceptions import EntityNotFoundError, OutOfStockError
from .models import CartItem, Product, User
from .order_service import OrderService
from .schemas import CartDetail, CartItemRequest, CartOrderItem

logger = logging.getLogger(__name__)


class CartService:
    """Cart business rules on top of an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.order_service = OrderService(session)

    async def _get_user(self, email: str):
        res = await self.session.execute(select(User).where(User.email == email))
        return res.scalar_one_or_none()

    async def add_cart(self, item: CartItemRequest, email: str) -> int:
        prod_res = await self.session.execute(select(Product).where(Product.id == item.product_id))
        product = prod_res.scalar_one_or_none()
        if product is None:
            raise EntityNotFoundError("Product not found.")

        user = await self._get_user(email)
        if user is None:
            raise EntityNotFoundError("User not found.")

        if product.stock is not None and item.quantity > product.stock:
            raise OutOfStockError(product.name, product.stock)

        cart_item = CartItem(user_id=user.id, product_id=product.id, quantity=item.quantity)
        self.session.add(cart_item)
        await self.session.commit()
        logger.info("cart item %s added for %s (product=%s, qty=%s)",
                    cart_item.id, email, product.id, item.quantity)
        return cart_item.id

    async def get_cart_list(self, email: str) -> List[CartDetail]:
        result = await self.session.execute(
            select(CartItem)
            .join(User, CartItem.user_id == User.id)
            .options(selectinload(CartItem.product))
            .where(User.email == email)
            .order_by(CartItem.id.desc())
        )
        return [
            CartDetail(
                cart_item_id=ci.id,
                product_id=ci.product_id,
                product_name=ci.product.name,
                price=float(ci.product.price),
                quantity=ci.quantity,
                image_url=ci.product.image_url,
            )
            for ci in result.scalars().all()
        ]

    async def validate_cart_item(self, cart_item_id: int, email: str) -> bool:
        """True iff the cart item exists and belongs to the user with this email."""
        res = await self.session.execute(
            select(CartItem.id)
            .join(User, CartItem.user_id == User.id)
            .where(CartItem.id == cart_item_id, User.email == email)
        )
        return res.scalar_one_or_none() is not None

    async def update_cart_item_count(self, cart_item_id: int, count: int) -> None:
        item = await self.session.get(CartItem, cart_item_id)
        if item is None:
            raise EntityNotFoundError("Cart item not found.")
        item.quantity = count
        await self.session.commit()
        logger.info("cart item %s quantity set to %s", cart_item_id, count)

    async def delete_cart_item(self, cart_item_id: int) -> None:
        item = await self.session.get(CartItem, cart_item_id)
        if item is None:
            raise EntityNotFoundError("Cart item not found.")
        await self.session.delete(item)
        await self.session.commit()
        logger.info("cart item %s deleted", cart_item_id)

    async def order_cart_item(self, selection: List[CartOrderItem], email: str) -> int:
        lines = []
        seen = set()
        for sel in selection:
            if sel.cart_item_id in seen:
                continue
            seen.add(sel.cart_item_id)
            item = await self.session.get(CartItem, sel.cart_item_id)
            if item is None:
                raise EntityNotFoundError("Cart item not found.")
            lines.append(item)

        try:
            order = await self.order_service.order(lines, email)
            for line in lines:
                await self.session.delete(line)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return order.id


def get_cart_service(session: AsyncSession = Depends(get_session)) -> CartService:
    return CartService(session)
