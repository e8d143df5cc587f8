# shop/order_service.py
import logging
from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import EntityNotFoundError, OutOfStockError
from .models import CartItem, Order, OrderItem, Product, User

logger = logging.getLogger(__name__)


class OrderService:
    """Turns cart lines into an order. The caller owns the transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def order(self, lines: List[CartItem], email: str) -> Order:
        res = await self.session.execute(select(User).where(User.email == email))
        user = res.scalar_one_or_none()
        if user is None:
            raise EntityNotFoundError("User not found.")

        # 1) check stock for every line before touching anything
        total = Decimal("0.00")
        products = {}  # product_id -> Product
        needed = {}    # product_id -> total quantity across lines
        for line in lines:
            if line.product_id not in products:
                prod_res = await self.session.execute(select(Product).where(Product.id == line.product_id))
                product = prod_res.scalar_one_or_none()
                if product is None:
                    raise EntityNotFoundError(f"Product {line.product_id} not found.")
                products[product.id] = product
            needed[line.product_id] = needed.get(line.product_id, 0) + line.quantity

        for product_id, qty in needed.items():
            product = products[product_id]
            if product.stock < qty:
                raise OutOfStockError(product.name, product.stock)

        # 2) order + items, price fixed at order time
        order = Order(user_id=user.id, status="ordered", total_price=Decimal("0.00"))
        self.session.add(order)
        await self.session.flush()  # order.id

        for line in lines:
            product = products[line.product_id]
            self.session.add(OrderItem(
                order_id=order.id,
                product_id=product.id,
                quantity=line.quantity,
                price=product.price,
            ))
            total += Decimal(product.price) * Decimal(line.quantity)

        # 3) stock decrement
        for product_id, qty in needed.items():
            products[product_id].stock -= qty

        order.total_price = total
        await self.session.flush()
        logger.info("order %s created for %s: %d line(s), total %s", order.id, email, len(lines), total)
        return order
