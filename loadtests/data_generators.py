"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the services' validation rules
(EmailAddress VO, positive prices, complete shipping addresses) and match the
field names expected by the APIs' Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

PAYMENT_METHODS = ["Credit Card", "PayPal", "Cash on Delivery"]
CATEGORIES = ["Apparel", "Kitchen", "Books", "Outdoors", "Toys"]

# ---------- Auth ----------


def valid_email() -> str:
    """Generate emails that pass EmailAddress VO validation.

    Rules: exactly one @, no spaces/tabs, valid domain with dot,
    no leading/trailing dots, no consecutive dots.
    """
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def unique_username() -> str:
    """Usernames are unique across the store; 3 to 50 characters."""
    return f"{fake.user_name()[:30]}_{uuid.uuid4().hex[:6]}"


def password() -> str:
    return fake.password(length=12)


def registration_data(role: str | None = None) -> dict:
    """Generate a RegisterUserRequest payload."""
    payload = {"username": unique_username(), "email": valid_email(), "password": password()}
    if role:
        payload["role"] = role
    return payload


# ---------- Products ----------


def product_data() -> dict:
    """Generate CreateProductRequest payload."""
    return {
        "name": fake.catch_phrase()[:200],
        "description": fake.paragraph(nb_sentences=3),
        "price": round(random.uniform(2.0, 250.0), 2),
        "image": fake.image_url(),
        "category": random.choice(CATEGORIES),
        "stock": random.randint(0, 500),
    }


def product_update_data() -> dict:
    return {"price": round(random.uniform(2.0, 250.0), 2), "stock": random.randint(0, 500)}


# ---------- Orders ----------


def shipping_address() -> dict:
    return {
        "full_name": fake.name()[:200],
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "postal_code": fake.zipcode()[:20],
        "country": "US",
    }


def payment_method() -> str:
    return random.choice(PAYMENT_METHODS)
