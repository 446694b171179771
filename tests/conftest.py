"""
Shared fixtures for the SportZone test suite.
"""
from decimal import Decimal

import pytest
from django.test import Client

from store.context import RequestContext
from store.models import Category, Product, User
from store.schemas import ShippingDetails


@pytest.fixture(autouse=True)
def _store_settings(settings):
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.STRIPE_SECRET_KEY = ""
    settings.NOTIFICATIONS_SEND_ON_COMMIT = True
    settings.NOTIFICATION_MAX_ATTEMPTS = 3
    settings.NOTIFICATION_RETRY_BACKOFF = 60


# ============================================================================
# Catalog
# ============================================================================


@pytest.fixture
def category(db):
    return Category.objects.create(
        name="Футбол",
        name_en="Football",
        image="https://images.example.com/football.jpg",
        icon="fa-futbol",
    )


@pytest.fixture
def make_product(category):
    def make(name_en="Match Ball", price="100.00", discounted_price=None, **fields):
        return Product.objects.create(
            name=fields.pop("name", name_en),
            name_en=name_en,
            description=fields.pop("description", f"{name_en} description"),
            description_en=fields.pop("description_en", f"{name_en} description"),
            price=Decimal(price),
            discounted_price=Decimal(discounted_price) if discounted_price is not None else None,
            category=fields.pop("category", category),
            image=fields.pop("image", "https://images.example.com/product.jpg"),
            stock=fields.pop("stock", 10),
            **fields,
        )
    return make


# ============================================================================
# Users & clients
# ============================================================================


@pytest.fixture
def customer(db):
    return User.objects.create_user(
        username="ivan",
        email="ivan@example.com",
        password="secret123",
        first_name="Иван",
        last_name="Петров",
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(username="maria", email="maria@example.com", password="secret123")


@pytest.fixture
def store_admin(db):
    return User.objects.create_user(
        username="boss",
        email="boss@sportzone.bg",
        password="secret123",
        is_admin=True,
    )


@pytest.fixture
def customer_client(customer):
    client = Client()
    client.force_login(customer)
    return client


@pytest.fixture
def admin_api(store_admin):
    client = Client()
    client.force_login(store_admin)
    return client


@pytest.fixture
def customer_ctx(customer):
    return RequestContext(user=customer)


@pytest.fixture
def admin_ctx(store_admin):
    return RequestContext(user=store_admin)


@pytest.fixture
def shipping():
    return ShippingDetails(address="ul. Vitosha 15", city="Sofia", phone="+359888123456")
