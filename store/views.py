import json

from django.http import HttpResponseNotAllowed, JsonResponse
from django.middleware.csrf import get_token
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import accounts, cart, catalog, orders, payments, reviews
from .context import RequestContext
from .errors import EmptyCartError, NotAuthenticated, ValidationFailed
from .schemas import (
    CartAdd, CartUpdate, CategoryCreate, LoginUser, PageQuery, PaymentIntentRequest,
    ProductCreate, ProductUpdate, RegisterUser, ReviewCreate, SearchQuery,
    ShippingDetails, StatusUpdate,
)
from .serializers import (
    cart_line_data, category_data, order_data, order_item_data, product_data,
    review_data, testimonial_data, user_data,
)
from .store_utils import get_cart_count, to_money


def _json(data, status=200):
    return JsonResponse(data, status=status, safe=False)


def _body(request, schema):
    try:
        data = json.loads(request.body or b'{}')
    except ValueError:
        raise ValidationFailed("Invalid JSON body")
    return schema.model_validate(data)


def _query(request, schema):
    return schema.model_validate(request.GET.dict())


# -------------------------------
# AUTH
# -------------------------------
@require_POST
def register(request):
    command = _body(request, RegisterUser)
    user = accounts.register(command)
    return _json(user_data(user), status=201)


@require_POST
def login_view(request):
    command = _body(request, LoginUser)
    user = accounts.log_in(request, command)
    return _json({'user': user_data(user)})


@require_POST
def logout_view(request):
    accounts.log_out(request)
    return _json({'message': "Logged out successfully"})


@require_GET
def me(request):
    ctx = RequestContext.from_request(request)
    if not ctx.is_authenticated:
        raise NotAuthenticated("Not authenticated")
    return _json(user_data(ctx.user))


@require_GET
@ensure_csrf_cookie
def csrf(request):
    return _json({'csrfToken': get_token(request)})


# -------------------------------
# CATALOG
# -------------------------------
@require_GET
def category_list(request):
    return _json([category_data(c) for c in catalog.list_categories()])


@require_GET
def category_detail(request, pk):
    return _json(category_data(catalog.get_category(pk)))


@require_GET
def product_list(request):
    page = _query(request, PageQuery)
    products = catalog.list_products(page.limit, page.offset)
    return _json([product_data(p) for p in products])


@require_GET
def product_featured(request):
    page = _query(request, PageQuery)
    return _json([product_data(p) for p in catalog.featured_products(page.limit)])


@require_GET
def product_by_category(request, pk):
    page = _query(request, PageQuery)
    products = catalog.products_by_category(pk, page.limit, page.offset)
    return _json([product_data(p) for p in products])


@require_GET
def product_search(request):
    search = _query(request, SearchQuery)
    return _json([product_data(p) for p in catalog.search_products(search.q)])


@require_GET
def product_detail(request, pk):
    return _json(product_data(catalog.get_product(pk)))


@require_GET
def testimonial_list(request):
    return _json([testimonial_data(t) for t in catalog.list_testimonials()])


# -------------------------------
# REVIEWS
# -------------------------------
@require_POST
def review_create(request):
    ctx = RequestContext.from_request(request)
    ctx.require_user()
    command = _body(request, ReviewCreate)
    review = reviews.create_review(ctx, command)
    return _json(review_data(review), status=201)


@require_GET
def review_list(request, product_id):
    return _json([review_data(r) for r in reviews.list_reviews(product_id)])


# -------------------------------
# CART SYSTEM
# -------------------------------
@require_http_methods(['GET', 'POST', 'DELETE'])
def cart_view(request):
    user = RequestContext.from_request(request).require_user()

    if request.method == 'POST':
        command = _body(request, CartAdd)
        product = catalog.get_product(command.product_id)
        line = cart.add_item(user, product, command.quantity)
        return _json(cart_line_data(line), status=201)

    if request.method == 'DELETE':
        cart.clear(user)
        return _json({'message': "Cart cleared successfully"})

    lines = cart.list_lines(user)
    response = _json([cart_line_data(line) for line in lines])
    response['X-Cart-Count'] = str(get_cart_count(lines))
    return response


@require_http_methods(['PUT', 'DELETE'])
def cart_item(request, pk):
    user = RequestContext.from_request(request).require_user()

    if request.method == 'DELETE':
        cart.remove_item(user, pk)
        return _json({'message': "Cart item removed successfully"})

    command = _body(request, CartUpdate)
    line = cart.update_item(user, pk, command.quantity)
    return _json(cart_line_data(line))


# -------------------------------
# CHECKOUT
# -------------------------------
@require_POST
def create_payment_intent(request):
    user = RequestContext.from_request(request).require_user()
    command = _body(request, PaymentIntentRequest)

    lines = cart.list_lines(user)
    if not lines:
        raise EmptyCartError()

    # The charged amount is the server-side cart total; the client's figure is only checked.
    total = cart.cart_total(lines)
    if to_money(command.amount) != total:
        raise ValidationFailed("Amount does not match cart total")

    client_secret = payments.create_payment_intent(total, metadata={'user_id': str(user.pk)})
    return _json({'clientSecret': client_secret, 'amount': float(total)})


@require_http_methods(['GET', 'POST'])
def order_list(request):
    ctx = RequestContext.from_request(request)

    if request.method == 'POST':
        ctx.require_user()
        shipping = _body(request, ShippingDetails)
        idempotency_key = request.headers.get('Idempotency-Key', '').strip()[:64] or None
        placed = orders.place_order(ctx, shipping, idempotency_key=idempotency_key)
        return _json(order_data(placed.order), status=201 if placed.created else 200)

    return _json([order_data(o) for o in orders.orders_for(ctx)])


@require_GET
def order_detail(request, pk):
    ctx = RequestContext.from_request(request)
    order = orders.get_order(ctx, pk)
    return _json({
        'order': order_data(order),
        'items': [order_item_data(item) for item in order.items.all()],
    })


@require_http_methods(['PATCH'])
def order_status(request, pk):
    ctx = RequestContext.from_request(request)
    ctx.require_admin()
    command = _body(request, StatusUpdate)
    order = orders.set_status(ctx, pk, command.status)
    return _json(order_data(order))


# -------------------------------
# ADMIN
# -------------------------------
@require_GET
def admin_order_list(request):
    ctx = RequestContext.from_request(request)
    return _json([order_data(o) for o in orders.all_orders(ctx)])


@require_POST
def admin_product_create(request):
    RequestContext.from_request(request).require_admin()
    command = _body(request, ProductCreate)
    product = catalog.create_product(command)
    return _json(product_data(product), status=201)


def admin_product_detail(request, pk):
    RequestContext.from_request(request).require_admin()

    if request.method == 'PUT':
        command = _body(request, ProductUpdate)
        return _json(product_data(catalog.update_product(pk, command)))

    if request.method == 'DELETE':
        catalog.delete_product(pk)
        return _json({'message': "Product deleted successfully"})

    return HttpResponseNotAllowed(['PUT', 'DELETE'])


@require_POST
def admin_category_create(request):
    RequestContext.from_request(request).require_admin()
    command = _body(request, CategoryCreate)
    category = catalog.create_category(command)
    return _json(category_data(category), status=201)
