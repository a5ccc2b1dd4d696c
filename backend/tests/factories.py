"""
Shared test data builders.
"""

from rest_api.models import Product, User
from shared.security.password import hash_password


ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass123"
USER_EMAIL = "user@example.com"
USER_PASSWORD = "userpass123"


def make_user(db_session, email: str, password: str, role_type: str, name: str = "Test User") -> User:
    user = User(
        name=name,
        email=email,
        password=hash_password(password),
        role_type=role_type,
        role_description=f"{role_type} account",
        phone="+5215550000000",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def make_product(db_session, name: str = "Widget", price_cents: int = 1000, quantity: int = 10) -> Product:
    product = Product(
        name=name,
        description=f"{name} description",
        quantity=quantity,
        price_cents=price_cents,
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


def login(client, email: str, password: str) -> dict:
    """Log in through the API and return the response body."""
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    return response.json()
