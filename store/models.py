from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


# ------------------------------
# USER MODEL
# ------------------------------
class User(AbstractUser):
    email = models.EmailField(unique=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    is_admin = models.BooleanField(default=False)

    @property
    def has_admin_access(self):
        return self.is_admin or self.is_superuser

    @property
    def display_name(self):
        return self.first_name or self.username


# ------------------------------
# CATEGORY MODEL
# ------------------------------
class Category(models.Model):
    name = models.CharField(max_length=100)
    name_en = models.CharField(max_length=100)
    image = models.URLField(max_length=500)
    icon = models.CharField(max_length=50)

    class Meta:
        ordering = ['id']
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name_en or self.name


# ------------------------------
# PRODUCT MODEL
# ------------------------------
class Product(models.Model):
    name = models.CharField(max_length=255)
    name_en = models.CharField(max_length=255)
    description = models.TextField()
    description_en = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2)
    discounted_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    category = models.ForeignKey(
        Category,
        on_delete=models.CASCADE,
        related_name="products"
    )

    image = models.URLField(max_length=500)
    rating = models.FloatField(default=0)
    review_count = models.PositiveIntegerField(default=0)
    # Display only; checkout never reserves or decrements it.
    stock = models.PositiveIntegerField(default=0)
    brand = models.CharField(max_length=100, default="SportZone")
    badge = models.CharField(max_length=50, blank=True, null=True)
    badge_en = models.CharField(max_length=50, blank=True, null=True)
    featured = models.BooleanField(default=False)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.name_en or self.name

    @property
    def effective_price(self):
        """Price used for cart and order totals."""
        if self.discounted_price is not None:
            return self.discounted_price
        return self.price

    def discount_percent(self):
        if self.discounted_price is not None and self.discounted_price < self.price:
            return int(((self.price - self.discounted_price) / self.price) * 100)
        return 0


# ------------------------------
# TESTIMONIAL MODEL
# ------------------------------
class Testimonial(models.Model):
    name = models.CharField(max_length=100)
    title = models.CharField(max_length=100)
    content = models.TextField()
    image = models.URLField(max_length=500, blank=True, null=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.name


# ------------------------------
# CART MODEL
# ------------------------------
class CartItem(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="cart_items")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="cart_items")
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='unique_cart_line'),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.product_id} x{self.quantity}"

    @property
    def line_total(self):
        return self.product.effective_price * self.quantity


# ------------------------------
# ORDER MODEL
# ------------------------------
class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'В очакване'
    PROCESSING = 'processing', 'Обработва се'
    SHIPPED = 'shipped', 'Изпратена'
    DELIVERED = 'delivered', 'Доставена'
    CANCELED = 'canceled', 'Отказана'


class Order(models.Model):
    Status = OrderStatus

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="orders")

    # Snapshot taken at checkout, never recomputed.
    total = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )

    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    phone = models.CharField(max_length=30)

    idempotency_key = models.CharField(max_length=64, blank=True, null=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'idempotency_key'], name='unique_order_idempotency_key'),
        ]

    def __str__(self):
        return f"Order #{self.id or 'unsaved'} - {self.user}"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.SET_NULL, null=True, related_name='order_items')
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.product_name} × {self.quantity}"

    @property
    def subtotal(self):
        return self.price * self.quantity


# ------------------------------
# REVIEW MODEL
# ------------------------------
class Review(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="reviews")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="reviews")
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.product_id} - {self.rating}★ by {self.user_id}"


# ------------------------------
# NOTIFICATION OUTBOX
# ------------------------------
class Notification(models.Model):
    ORDER_CONFIRMATION = 'order_confirmation'
    STATUS_CHANGE = 'status_change'
    KIND_CHOICES = [
        (ORDER_CONFIRMATION, 'Order confirmation'),
        (STATUS_CHANGE, 'Status change'),
    ]

    PENDING = 'pending'
    SENT = 'sent'
    FAILED = 'failed'
    STATE_CHOICES = [
        (PENDING, 'Pending'),
        (SENT, 'Sent'),
        (FAILED, 'Failed'),
    ]

    kind = models.CharField(max_length=30, choices=KIND_CHOICES)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='notifications')
    recipient = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    payload = models.JSONField(default=dict, blank=True)

    state = models.CharField(max_length=20, choices=STATE_CHOICES, default=PENDING)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True)
    next_attempt_at = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['state', 'next_attempt_at'], name='notification_due_idx'),
        ]

    def __str__(self):
        return f"{self.kind} for order #{self.order_id} ({self.state})"
