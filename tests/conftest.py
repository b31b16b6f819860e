# tests/conftest.py
import os

# The application engine is never used by the tests; keep it off PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.config.database import Base, build_engine, get_db
from app.main import app
from app.modules.checkout.locking import product_locks
from app.shared.database.models import Category, Product

@pytest.fixture
def engine(tmp_path):
    # File-backed so concurrent sessions see each other's commits
    engine = build_engine(f"sqlite:///{tmp_path / 'retail.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    product_locks.clear()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

def make_category(db, name="Food", description="Food category"):
    category = Category(name=name, description=description)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category

def make_product(db, name, price, stock, category=None):
    product = Product(
        name=name,
        price=price,
        stock=stock,
        category_id=category.id if category else None
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product

def stock_of(session_factory, product_id):
    """Read committed stock through a fresh session"""
    session = session_factory()
    try:
        return session.get(Product, product_id).stock
    finally:
        session.close()
