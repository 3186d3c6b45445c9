"""
Create the tables and seed the reference rows the pricing and filter
endpoints rely on: one ``params`` row per amount bracket, the income
brackets and the family situations.

Existing rows with the same name are left untouched, so the script can be
re-run safely.

Usage:
    python backend/scripts/seed_reference_data.py
"""

import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add the backend directory to path to import dzhehuti modules
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sqlalchemy import select

from dzhehuti.core.db import SessionLocal, engine
from dzhehuti.models import Base, Category, FamilySituation, Income, Param
from dzhehuti.services.pricing import AMOUNT_BRACKETS
from dzhehuti.services.respondent_filter import INCOME_RANGES, FamilySituationName

AMOUNT_CATEGORY = "Количество респондентов"
# Default ratio per bracket; larger panels get a smaller surcharge.
BRACKET_RATIOS = (
    "1.00", "0.90", "0.80", "0.70", "0.60", "0.50", "0.45",
    "0.40", "0.35", "0.30", "0.25", "0.20", "0.15",
)


async def seed_reference_data():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as session:
        category = await session.scalar(select(Category).where(Category.name == AMOUNT_CATEGORY))
        if category is None:
            category = Category(name=AMOUNT_CATEGORY)
            session.add(category)
            await session.flush()

        existing_params = set((await session.execute(select(Param.name))).scalars().all())
        for bracket, ratio in zip(AMOUNT_BRACKETS, BRACKET_RATIOS):
            if existing_params.intersection(bracket.names):
                continue
            session.add(Param(name=bracket.label, ratio=Decimal(ratio), category_id=category.id))
            print(f"➕ params: {bracket.label} = {ratio}")

        existing_income = set((await session.execute(select(Income.name))).scalars().all())
        for name in INCOME_RANGES:
            if name not in existing_income:
                session.add(Income(name=name))
                print(f"➕ income: {name}")

        existing_family = set((await session.execute(select(FamilySituation.name))).scalars().all())
        for situation in FamilySituationName:
            if situation.value not in existing_family:
                session.add(FamilySituation(name=situation.value))
                print(f"➕ family_situation: {situation.value}")

        await session.commit()
    await engine.dispose()
    print("✅ Reference data seeded")


if __name__ == "__main__":
    try:
        asyncio.run(seed_reference_data())
    except Exception as e:
        print(f"❌ Error seeding reference data: {e}")
        sys.exit(1)
