from decimal import Decimal

import pytest
from django.core.management import call_command

from store import catalog
from store.errors import NotFound
from store.models import Category, Product, Testimonial, User
from store.schemas import ProductUpdate


# ============================================================================
# Catalog functions
# ============================================================================


def test_search_matches_names_and_descriptions_in_both_languages(make_product):
    make_product("Running Shoes", name="Обувки за бягане", description_en="Light trainers")
    make_product("Yoga Mat", name="Постелка", description_en="Non-slip surface")

    assert [p.name_en for p in catalog.search_products("RUNNING")] == ["Running Shoes"]
    assert [p.name_en for p in catalog.search_products("бягане")] == ["Running Shoes"]
    assert [p.name_en for p in catalog.search_products("non-slip")] == ["Yoga Mat"]
    assert catalog.search_products("tennis") == []


def test_featured_products(make_product):
    make_product("Plain")
    make_product("Star", featured=True)

    assert [p.name_en for p in catalog.featured_products()] == ["Star"]


def test_products_are_paged(make_product):
    for i in range(5):
        make_product(f"P{i}")

    page = catalog.list_products(limit=2, offset=1)

    assert len(page) == 2
    assert len(catalog.list_products()) == 5


def test_products_by_category(make_product, category):
    other = Category.objects.create(name="Тенис", name_en="Tennis", image="https://x.example/t.jpg", icon="fa")
    make_product("Ball")
    make_product("Racket", category=other)

    assert [p.name_en for p in catalog.products_by_category(other.pk)] == ["Racket"]
    assert [p.name_en for p in catalog.products_by_category(category.pk)] == ["Ball"]


def test_update_product_touches_only_given_fields(make_product):
    ball = make_product(price="30.00", stock=4)

    updated = catalog.update_product(ball.pk, ProductUpdate(price=Decimal("25.00")))

    assert updated.price == Decimal("25.00")
    assert updated.stock == 4
    with pytest.raises(NotFound):
        catalog.update_product(ball.pk, ProductUpdate(category_id=999))


def test_effective_price_prefers_discount(make_product):
    assert make_product(price="100.00").effective_price == Decimal("100.00")
    discounted = make_product(price="100.00", discounted_price="80.00")
    assert discounted.effective_price == Decimal("80.00")
    assert discounted.discount_percent() == 20


# ============================================================================
# Public API
# ============================================================================


def test_product_list_and_detail(client, make_product):
    ball = make_product(price="89.99", discounted_price="79.99", badge="Нов", badge_en="New")

    listing = client.get("/api/products")
    assert listing.status_code == 200
    assert [p["id"] for p in listing.json()] == [ball.pk]

    detail = client.get(f"/api/products/{ball.pk}").json()
    assert detail["nameEn"] == "Match Ball"
    assert detail["price"] == 89.99
    assert detail["discountedPrice"] == 79.99
    assert detail["discountPercent"] == 11
    assert detail["categoryId"] == ball.category_id
    assert detail["badgeEn"] == "New"
    assert detail["brand"] == "SportZone"


def test_missing_product_is_404(client, db):
    response = client.get("/api/products/12345")

    assert response.status_code == 404
    assert response.json() == {"message": "Product not found"}


def test_product_list_rejects_bad_paging(client, db):
    assert client.get("/api/products?limit=0").status_code == 400
    assert client.get("/api/products?offset=-1").status_code == 400


def test_featured_and_category_endpoints(client, make_product, category):
    make_product("Star", featured=True)
    make_product("Plain")

    assert [p["nameEn"] for p in client.get("/api/products/featured").json()] == ["Star"]
    assert len(client.get(f"/api/products/category/{category.pk}").json()) == 2
    assert client.get("/api/products/category/999").json() == []


def test_search_endpoint(client, make_product):
    make_product("Running Shoes")

    response = client.get("/api/products/search", {"q": "run"})

    assert response.status_code == 200
    assert [p["nameEn"] for p in response.json()] == ["Running Shoes"]


def test_empty_search_is_rejected_before_touching_the_database(client, db, django_assert_num_queries):
    with django_assert_num_queries(0):
        response = client.get("/api/products/search", {"q": ""})

    assert response.status_code == 400
    assert response.json()["message"].startswith("q")


def test_categories_and_testimonials(client, category):
    Testimonial.objects.create(name="Мария", title="Футболист", content="Страхотно!", image="https://x.example/m.jpg")

    categories = client.get("/api/categories").json()
    assert categories == [{
        "id": category.pk,
        "name": "Футбол",
        "nameEn": "Football",
        "image": "https://images.example.com/football.jpg",
        "icon": "fa-futbol",
    }]
    assert client.get(f"/api/categories/{category.pk}").json()["nameEn"] == "Football"
    assert client.get("/api/categories/999").status_code == 404
    assert [t["name"] for t in client.get("/api/testimonials").json()] == ["Мария"]


# ============================================================================
# Admin API
# ============================================================================

NEW_PRODUCT = {
    "name": "Гира 10 кг",
    "nameEn": "Dumbbell 10 kg",
    "description": "Гира",
    "descriptionEn": "Cast iron dumbbell",
    "price": "59.90",
    "image": "https://images.example.com/dumbbell.jpg",
    "stock": 7,
}


def test_admin_creates_updates_and_deletes_product(admin_api, category):
    response = admin_api.post(
        "/api/admin/products", {**NEW_PRODUCT, "categoryId": category.pk}, content_type="application/json"
    )
    assert response.status_code == 201
    product_id = response.json()["id"]
    assert Product.objects.get(pk=product_id).price == Decimal("59.90")

    response = admin_api.put(
        f"/api/admin/products/{product_id}", {"discountedPrice": "49.90", "featured": True},
        content_type="application/json",
    )
    assert response.status_code == 200
    assert response.json()["discountedPrice"] == 49.9
    assert response.json()["featured"] is True

    assert admin_api.delete(f"/api/admin/products/{product_id}").status_code == 200
    assert not Product.objects.filter(pk=product_id).exists()


def test_admin_product_with_unknown_category(admin_api, db):
    response = admin_api.post(
        "/api/admin/products", {**NEW_PRODUCT, "categoryId": 999}, content_type="application/json"
    )

    assert response.status_code == 404
    assert response.json() == {"message": "Category not found"}


def test_customer_cannot_manage_catalog(customer_client, category, make_product):
    ball = make_product()

    assert customer_client.post(
        "/api/admin/products", {**NEW_PRODUCT, "categoryId": category.pk}, content_type="application/json"
    ).status_code == 403
    assert customer_client.delete(f"/api/admin/products/{ball.pk}").status_code == 403
    assert customer_client.post(
        "/api/admin/categories",
        {"name": "Плуване", "nameEn": "Swimming", "image": "https://x.example/s.jpg", "icon": "fa-swimmer"},
        content_type="application/json",
    ).status_code == 403
    assert Product.objects.filter(pk=ball.pk).exists()


def test_admin_creates_category(admin_api, db):
    response = admin_api.post(
        "/api/admin/categories",
        {"name": "Плуване", "nameEn": "Swimming", "image": "https://x.example/s.jpg", "icon": "fa-swimmer"},
        content_type="application/json",
    )

    assert response.status_code == 201
    assert Category.objects.get(pk=response.json()["id"]).name_en == "Swimming"


def test_admin_product_detail_rejects_get(admin_api, make_product):
    assert admin_api.get(f"/api/admin/products/{make_product().pk}").status_code == 405


def test_seed_catalog_is_idempotent(db):
    call_command("seed_catalog", "--admin-password", "secret123")
    call_command("seed_catalog")

    assert Category.objects.count() == 4
    assert Product.objects.count() == 8
    assert Product.objects.filter(featured=True).count() == 4
    assert Testimonial.objects.count() == 3
    assert User.objects.get(username="admin").has_admin_access


@pytest.mark.parametrize("field", ["name", "nameEn", "price", "categoryId", "image", "brand", "stock"])
def test_admin_update_rejects_null_for_required_fields(admin_api, make_product, field):
    ball = make_product(price="30.00")

    response = admin_api.put(f"/api/admin/products/{ball.pk}", {field: None}, content_type="application/json")

    assert response.status_code == 400
    assert "cannot be null" in response.json()["message"]
    ball.refresh_from_db()
    assert ball.name_en == "Match Ball"
    assert ball.price == Decimal("30.00")


def test_admin_update_can_clear_discount_and_badges(admin_api, make_product):
    ball = make_product(price="30.00", discounted_price="25.00", badge="Нов", badge_en="New")

    response = admin_api.put(
        f"/api/admin/products/{ball.pk}",
        {"discountedPrice": None, "badge": None, "badgeEn": None},
        content_type="application/json",
    )

    assert response.status_code == 200
    ball.refresh_from_db()
    assert (ball.discounted_price, ball.badge, ball.badge_en) == (None, None, None)
    assert response.json()["discountPercent"] == 0
