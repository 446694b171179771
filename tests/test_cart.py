from decimal import Decimal

import pytest

from store import cart
from store.errors import NotFound, ValidationFailed
from store.models import CartItem


# ============================================================================
# Cart store
# ============================================================================


def test_adding_same_product_twice_merges_into_one_line(customer, make_product):
    ball = make_product(price="30.00")

    cart.add_item(customer, ball, 2)
    line = cart.add_item(customer, ball, 3)

    assert line.quantity == 5
    assert CartItem.objects.filter(user=customer).count() == 1


def test_lines_are_per_user(customer, other_customer, make_product):
    ball = make_product()

    cart.add_item(customer, ball, 1)
    cart.add_item(other_customer, ball, 4)

    assert [line.quantity for line in cart.list_lines(customer)] == [1]
    assert [line.quantity for line in cart.list_lines(other_customer)] == [4]


@pytest.mark.parametrize("quantity", [0, -1])
def test_add_rejects_quantity_below_one(customer, make_product, quantity):
    with pytest.raises(ValidationFailed):
        cart.add_item(customer, make_product(), quantity)
    assert not CartItem.objects.exists()


def test_merge_cannot_exceed_line_limit(customer, make_product):
    ball = make_product()
    cart.add_item(customer, ball, cart.MAX_LINE_QUANTITY)

    with pytest.raises(ValidationFailed):
        cart.add_item(customer, ball, 1)
    assert cart.list_lines(customer)[0].quantity == cart.MAX_LINE_QUANTITY


def test_update_sets_absolute_quantity(customer, make_product):
    line = cart.add_item(customer, make_product(), 4)

    updated = cart.update_item(customer, line.pk, 2)

    assert updated.quantity == 2
    with pytest.raises(ValidationFailed):
        cart.update_item(customer, line.pk, 0)


def test_cannot_touch_another_users_line(customer, other_customer, make_product):
    line = cart.add_item(other_customer, make_product(), 1)

    with pytest.raises(NotFound):
        cart.update_item(customer, line.pk, 3)
    with pytest.raises(NotFound):
        cart.remove_item(customer, line.pk)
    assert CartItem.objects.get(pk=line.pk).quantity == 1


def test_clear_removes_only_the_users_lines(customer, other_customer, make_product):
    ball, boots = make_product("Ball"), make_product("Boots")
    cart.add_item(customer, ball, 1)
    cart.add_item(customer, boots, 1)
    cart.add_item(other_customer, ball, 1)

    assert cart.clear(customer) == 2
    assert cart.list_lines(customer) == []
    assert len(cart.list_lines(other_customer)) == 1


def test_total_uses_current_effective_price(customer, make_product):
    ball = make_product(price="100.00")
    cart.add_item(customer, ball, 2)

    ball.discounted_price = Decimal("75.50")
    ball.save()

    assert cart.cart_total(cart.list_lines(customer)) == Decimal("151.00")


# ============================================================================
# Cart API
# ============================================================================


def test_cart_requires_login(client, db):
    assert client.get("/api/cart").status_code == 401
    assert client.post("/api/cart", {"productId": 1, "quantity": 1}, content_type="application/json").status_code == 401


def test_cart_api_add_list_update_remove(customer_client, make_product):
    ball = make_product(price="40.00", discounted_price="35.00")

    response = customer_client.post(
        "/api/cart", {"productId": ball.pk, "quantity": 2}, content_type="application/json"
    )
    assert response.status_code == 201
    line = response.json()
    assert line["quantity"] == 2
    assert line["product"]["discountedPrice"] == 35.0

    customer_client.post("/api/cart", {"productId": ball.pk, "quantity": 1}, content_type="application/json")
    listing = customer_client.get("/api/cart")
    assert listing.status_code == 200
    assert [item["quantity"] for item in listing.json()] == [3]
    assert listing["X-Cart-Count"] == "3"

    response = customer_client.put(f"/api/cart/{line['id']}", {"quantity": 5}, content_type="application/json")
    assert response.status_code == 200
    assert response.json()["quantity"] == 5

    response = customer_client.delete(f"/api/cart/{line['id']}")
    assert response.status_code == 200
    assert customer_client.get("/api/cart").json() == []


def test_cart_api_validates_body(customer_client, make_product):
    ball = make_product()

    response = customer_client.post(
        "/api/cart", {"productId": ball.pk, "quantity": 0}, content_type="application/json"
    )
    assert response.status_code == 400
    assert "quantity" in response.json()["message"]

    response = customer_client.post(
        "/api/cart", {"productId": 9999, "quantity": 1}, content_type="application/json"
    )
    assert response.status_code == 404
    assert response.json() == {"message": "Product not found"}


@pytest.mark.parametrize("quantity", [1000, 10**20])
def test_cart_api_rejects_oversized_quantity(customer_client, customer, make_product, quantity):
    ball = make_product()

    response = customer_client.post(
        "/api/cart", {"productId": ball.pk, "quantity": quantity}, content_type="application/json"
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("quantity")
    assert not CartItem.objects.filter(user=customer).exists()

    line = cart.add_item(customer, ball, 1)
    response = customer_client.put(f"/api/cart/{line.pk}", {"quantity": quantity}, content_type="application/json")
    assert response.status_code == 400
    assert CartItem.objects.get(pk=line.pk).quantity == 1


def test_cart_api_clear(customer_client, customer, make_product):
    cart.add_item(customer, make_product(), 1)

    response = customer_client.delete("/api/cart")

    assert response.status_code == 200
    assert not CartItem.objects.filter(user=customer).exists()
