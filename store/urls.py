from django.urls import path
from . import views

urlpatterns = [
    # auth
    path('auth/register', views.register, name='register'),
    path('auth/login', views.login_view, name='login'),
    path('auth/logout', views.logout_view, name='logout'),
    path('auth/me', views.me, name='me'),
    path('auth/csrf', views.csrf, name='csrf'),

    # catalog
    path('categories', views.category_list, name='categories'),
    path('categories/<int:pk>', views.category_detail, name='category_detail'),
    path('products', views.product_list, name='products'),
    path('products/featured', views.product_featured, name='products_featured'),
    path('products/category/<int:pk>', views.product_by_category, name='products_by_category'),
    path('products/search', views.product_search, name='products_search'),
    path('products/<int:pk>', views.product_detail, name='product_detail'),
    path('testimonials', views.testimonial_list, name='testimonials'),

    # reviews
    path('reviews', views.review_create, name='review_create'),
    path('reviews/<int:product_id>', views.review_list, name='reviews'),

    # cart & checkout
    path('cart', views.cart_view, name='cart'),
    path('cart/<int:pk>', views.cart_item, name='cart_item'),
    path('create-payment-intent', views.create_payment_intent, name='create_payment_intent'),
    path('orders', views.order_list, name='orders'),
    path('orders/<int:pk>', views.order_detail, name='order_detail'),
    path('orders/<int:pk>/status', views.order_status, name='order_status'),

    # admin
    path('admin/orders', views.admin_order_list, name='admin_orders'),
    path('admin/products', views.admin_product_create, name='admin_product_create'),
    path('admin/products/<int:pk>', views.admin_product_detail, name='admin_product_detail'),
    path('admin/categories', views.admin_category_create, name='admin_category_create'),
]
