import logging

from django.db.models import Q

from .errors import NotFound
from .models import Category, Product, Testimonial

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
FEATURED_PAGE_SIZE = 8


def _page(queryset, limit, offset):
    limit = limit or DEFAULT_PAGE_SIZE
    offset = offset or 0
    return list(queryset[offset:offset + limit])


# -------------------------------
# Products
# -------------------------------
def list_products(limit=None, offset=0):
    return _page(Product.objects.all(), limit, offset)


def featured_products(limit=None):
    return list(Product.objects.filter(featured=True)[:limit or FEATURED_PAGE_SIZE])


def products_by_category(category_id, limit=None, offset=0):
    return _page(Product.objects.filter(category_id=category_id), limit, offset)


def search_products(query):
    """Case-insensitive match against both languages' names and descriptions."""
    return list(Product.objects.filter(
        Q(name__icontains=query)
        | Q(name_en__icontains=query)
        | Q(description__icontains=query)
        | Q(description_en__icontains=query)
    ))


def get_product(product_id):
    product = Product.objects.filter(pk=product_id).first()
    if product is None:
        raise NotFound("Product not found")
    return product


def create_product(command):
    get_category(command.category_id)
    product = Product.objects.create(**command.model_dump())
    logger.info("Created product %s (%s)", product.pk, product.name_en)
    return product


def update_product(product_id, command):
    product = get_product(product_id)
    changes = command.model_dump(exclude_unset=True)
    if 'category_id' in changes:
        get_category(changes['category_id'])
    for field, value in changes.items():
        setattr(product, field, value)
    product.save()
    logger.info("Updated product %s: %s", product.pk, ", ".join(sorted(changes)))
    return product


def delete_product(product_id):
    product = get_product(product_id)
    product.delete()
    logger.info("Deleted product %s", product_id)


# -------------------------------
# Categories & testimonials
# -------------------------------
def list_categories():
    return list(Category.objects.all())


def get_category(category_id):
    category = Category.objects.filter(pk=category_id).first()
    if category is None:
        raise NotFound("Category not found")
    return category


def create_category(command):
    category = Category.objects.create(**command.model_dump())
    logger.info("Created category %s (%s)", category.pk, category.name_en)
    return category


def list_testimonials():
    return list(Testimonial.objects.all())
