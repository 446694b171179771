"""
JSON shapes returned by the API, keyed the way the storefront client reads them.
"""


def _amount(value):
    return float(value) if value is not None else None


def user_data(user):
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'firstName': user.first_name or None,
        'lastName': user.last_name or None,
        'address': user.address or None,
        'city': user.city or None,
        'phone': user.phone or None,
        'isAdmin': user.has_admin_access,
    }


def category_data(category):
    return {
        'id': category.id,
        'name': category.name,
        'nameEn': category.name_en,
        'image': category.image,
        'icon': category.icon,
    }


def product_data(product):
    return {
        'id': product.id,
        'name': product.name,
        'nameEn': product.name_en,
        'description': product.description,
        'descriptionEn': product.description_en,
        'price': _amount(product.price),
        'discountedPrice': _amount(product.discounted_price),
        'discountPercent': product.discount_percent(),
        'categoryId': product.category_id,
        'image': product.image,
        'rating': product.rating,
        'reviewCount': product.review_count,
        'stock': product.stock,
        'brand': product.brand,
        'badge': product.badge,
        'badgeEn': product.badge_en,
        'featured': product.featured,
    }


def testimonial_data(testimonial):
    return {
        'id': testimonial.id,
        'name': testimonial.name,
        'title': testimonial.title,
        'content': testimonial.content,
        'image': testimonial.image,
    }


def cart_line_data(line):
    return {
        'id': line.id,
        'userId': line.user_id,
        'productId': line.product_id,
        'quantity': line.quantity,
        'product': product_data(line.product),
    }


def order_data(order):
    return {
        'id': order.id,
        'userId': order.user_id,
        'total': _amount(order.total),
        'status': str(order.status),
        'createdAt': order.created_at.isoformat(),
        'address': order.address,
        'city': order.city,
        'phone': order.phone,
    }


def order_item_data(item):
    return {
        'id': item.id,
        'orderId': item.order_id,
        'productId': item.product_id,
        'productName': item.product_name,
        'quantity': item.quantity,
        'price': _amount(item.price),
        'product': product_data(item.product) if item.product is not None else None,
    }


def review_data(review):
    return {
        'id': review.id,
        'userId': review.user_id,
        'productId': review.product_id,
        'rating': review.rating,
        'comment': review.comment,
        'createdAt': review.created_at.isoformat(),
        'user': {'username': review.user.username},
    }
