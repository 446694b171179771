import logging

from .catalog import get_product
from .models import Review

logger = logging.getLogger(__name__)


def list_reviews(product_id):
    return list(Review.objects.filter(product_id=product_id).select_related('user'))


def create_review(ctx, command):
    user = ctx.require_user()
    product = get_product(command.product_id)
    review = Review.objects.create(
        user=user,
        product=product,
        rating=command.rating,
        comment=command.comment,
    )
    logger.info("Review %s: user %s rated product %s with %s", review.pk, user.pk, product.pk, review.rating)
    return review
