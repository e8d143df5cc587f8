"""Service-level errors.

Everything the cart and order services refuse to do is raised as a
ShopError subclass; the HTTP layer turns these into 400 responses carrying
the message.
"""


class ShopError(Exception):
    """Base class for cart/order business errors."""


class EntityNotFoundError(ShopError):
    """A referenced user, product or cart item does not exist."""


class OutOfStockError(ShopError):
    """Requested quantity exceeds what the product has in stock."""

    def __init__(self, product_name: str, stock: int):
        self.product_name = product_name
        self.stock = stock
        super().__init__(f"Not enough stock for {product_name} (in stock: {stock})")
