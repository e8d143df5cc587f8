# shop/cart.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from .auth import get_current_email
from .cart_service import CartService, get_cart_service
from .schemas import CartDetail, CartItemRequest, CartOrderRequest, MIN_QUANTITY_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cart"])

NOT_ALLOWED_TO_MODIFY = "You are not allowed to modify this cart item."
NOT_ALLOWED_TO_ORDER = "You are not allowed to order this cart item."
NOTHING_SELECTED = "Please select items to order."


@router.post("/cart", response_model=int)
async def add_cart(
    payload: CartItemRequest,
    cart_service: CartService = Depends(get_cart_service),
    email: str = Depends(get_current_email),
):
    # Shape errors never get here: they are turned into 400 by the app-level handler.
    try:
        cart_item_id = await cart_service.add_cart(payload, email)
    except Exception as e:
        logger.exception("add to cart failed for %s", email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return cart_item_id


@router.get("/cart", response_model=List[CartDetail])
async def get_cart(
    cart_service: CartService = Depends(get_cart_service),
    email: str = Depends(get_current_email),
):
    return await cart_service.get_cart_list(email)


@router.patch("/cartItem/{cart_item_id}", response_model=int)
async def update_cart_item(
    cart_item_id: int,
    count: int,
    cart_service: CartService = Depends(get_cart_service),
    email: str = Depends(get_current_email),
):
    if count <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MIN_QUANTITY_MESSAGE)
    if not await cart_service.validate_cart_item(cart_item_id, email):
        logger.warning("%s tried to update cart item %s they do not own", email, cart_item_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=NOT_ALLOWED_TO_MODIFY)

    await cart_service.update_cart_item_count(cart_item_id, count)
    return cart_item_id


@router.delete("/cartItem/{cart_item_id}", response_model=int)
async def delete_cart_item(
    cart_item_id: int,
    cart_service: CartService = Depends(get_cart_service),
    email: str = Depends(get_current_email),
):
    if not await cart_service.validate_cart_item(cart_item_id, email):
        logger.warning("%s tried to delete cart item %s they do not own", email, cart_item_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=NOT_ALLOWED_TO_MODIFY)

    await cart_service.delete_cart_item(cart_item_id)
    return cart_item_id


@router.post("/cart/orders", response_model=int)
async def order_cart_item(
    payload: Optional[CartOrderRequest] = None,
    cart_service: CartService = Depends(get_cart_service),
    email: str = Depends(get_current_email),
):
    selection = payload.cart_order_list if payload is not None else None

    # 403 rather than 400 here, kept for client compatibility
    if not selection:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=NOTHING_SELECTED)

    # every line is checked before anything is ordered
    for cart_order in selection:
        if not await cart_service.validate_cart_item(cart_order.cart_item_id, email):
            logger.warning("%s tried to order cart item %s they do not own", email, cart_order.cart_item_id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=NOT_ALLOWED_TO_ORDER)

    return await cart_service.order_cart_item(selection, email)
