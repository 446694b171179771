import pytest

from store import reviews
from store.context import RequestContext
from store.errors import NotAuthenticated, NotFound
from store.models import Review
from store.schemas import ReviewCreate


def test_create_and_list_reviews(customer_ctx, make_product):
    ball = make_product()

    review = reviews.create_review(customer_ctx, ReviewCreate(product_id=ball.pk, rating=5, comment="Супер!"))

    assert review.user == customer_ctx.user
    assert [r.comment for r in reviews.list_reviews(ball.pk)] == ["Супер!"]


def test_review_for_missing_product(customer_ctx):
    with pytest.raises(NotFound):
        reviews.create_review(customer_ctx, ReviewCreate(product_id=42, rating=3))


def test_anonymous_review_is_rejected(make_product):
    with pytest.raises(NotAuthenticated):
        reviews.create_review(RequestContext(), ReviewCreate(product_id=make_product().pk, rating=3))


def test_review_api(customer_client, client, make_product):
    ball = make_product()

    response = customer_client.post(
        "/api/reviews", {"productId": ball.pk, "rating": 4, "comment": "Good grip"}, content_type="application/json"
    )
    assert response.status_code == 201
    assert response.json()["user"] == {"username": "ivan"}

    listing = client.get(f"/api/reviews/{ball.pk}")
    assert listing.status_code == 200
    assert [(r["rating"], r["comment"]) for r in listing.json()] == [(4, "Good grip")]


@pytest.mark.parametrize("rating", [0, 6])
def test_review_api_rejects_out_of_range_rating(customer_client, make_product, rating):
    response = customer_client.post(
        "/api/reviews", {"productId": make_product().pk, "rating": rating}, content_type="application/json"
    )

    assert response.status_code == 400
    assert not Review.objects.exists()


def test_review_api_requires_login(client, make_product):
    response = client.post(
        "/api/reviews", {"productId": make_product().pk, "rating": 4}, content_type="application/json"
    )

    assert response.status_code == 401
