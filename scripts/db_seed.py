"""Seed the database with a demo user and a fixed product catalog.

Idempotent: creates the tables if they do not exist, upserts the demo
products by id and only adds the demo user when missing.

Usage:
    python scripts/db_seed.py

Reads DATABASE_URL from the environment (see shop/config.py).
"""
import asyncio
import logging
import sys
from decimal import Decimal
from pathlib import Path

# Ensure project root is on sys.path so the script runs from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import select

from shop.auth import get_password_hash
from shop.config import DATABASE_URL
from shop.database import async_session_maker, create_tables
from shop.models import Product, User

logger = logging.getLogger("db_seed")

DEMO_USER = ("demo@example.com", "Demo User", "password123")

FIXED_PRODUCTS = [
    {"name": "Cotton T-shirt", "price": "19.90", "category": "apparel", "stock": 50,
     "description": "Plain crew-neck t-shirt, 100% cotton."},
    {"name": "Denim jacket", "price": "89.00", "category": "apparel", "stock": 10,
     "description": "Classic blue denim jacket."},
    {"name": "Canvas sneakers", "price": "54.99", "category": "shoes", "stock": 20,
     "description": "Low-top canvas sneakers with rubber sole."},
    {"name": "Leather belt", "price": "29.50", "category": "accessories", "stock": 15,
     "description": "Full-grain leather belt with steel buckle."},
    {"name": "Wool scarf", "price": "24.00", "category": "accessories", "stock": 5,
     "description": "Soft merino wool scarf."},
]


async def seed_users(session):
    email, full_name, password = DEMO_USER
    res = await session.execute(select(User).where(User.email == email))
    if res.scalar_one_or_none() is None:
        session.add(User(email=email, full_name=full_name, password_hash=get_password_hash(password)))
        logger.info("seeded user %s", email)


async def seed_products(session):
    for idx, item in enumerate(FIXED_PRODUCTS, start=1):
        product = await session.get(Product, idx)
        if product is None:
            product = Product(id=idx)
            session.add(product)
        product.name = item["name"]
        product.price = Decimal(item["price"])
        product.category = item["category"]
        product.description = item["description"]
        product.stock = item["stock"]
    logger.info("seeded %d fixed demo products", len(FIXED_PRODUCTS))


async def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    logger.info("DB seed starting, DATABASE_URL=%s", DATABASE_URL)
    await create_tables()
    async with async_session_maker() as session:
        await seed_users(session)
        await seed_products(session)
        await session.commit()
    logger.info("DB seed complete")


if __name__ == "__main__":
    asyncio.run(main())
