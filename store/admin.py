from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from . import notifications, orders
from .context import RequestContext
from .models import Category, Notification, Order, OrderItem, OrderStatus, Product, Review, Testimonial, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'email', 'first_name', 'last_name', 'is_admin', 'is_staff')
    list_filter = BaseUserAdmin.list_filter + ('is_admin',)
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Store", {'fields': ('address', 'city', 'phone', 'is_admin')}),
    )


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'name_en', 'icon')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('id', 'name_en', 'category', 'price', 'discounted_price', 'stock', 'featured')
    list_filter = ('category', 'featured')
    search_fields = ('name', 'name_en', 'brand')


admin.site.register(Testimonial)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'product', 'user', 'rating', 'created_at')
    list_filter = ('rating',)
    readonly_fields = ('created_at',)


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'product_name', 'quantity', 'price')
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'total', 'status', 'city', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('user__username', 'user__email', 'id', 'phone')
    readonly_fields = ('user', 'total', 'status', 'address', 'city', 'phone', 'idempotency_key', 'created_at', 'updated_at')
    inlines = [OrderItemInline]

    actions = ['mark_as_processing', 'mark_as_shipped', 'mark_as_delivered', 'mark_as_canceled']

    def _set_status(self, request, queryset, status):
        # Goes through the workflow so the customer gets notified
        ctx = RequestContext.from_request(request)
        if not ctx.is_admin:
            self.message_user(request, "Only store admins can change order status.", messages.ERROR)
            return
        for order in queryset:
            orders.set_status(ctx, order.pk, status)
        self.message_user(request, f"{queryset.count()} order(s) marked as {status.label}.", messages.SUCCESS)

    @admin.action(description="Mark as processing")
    def mark_as_processing(self, request, queryset):
        self._set_status(request, queryset, OrderStatus.PROCESSING)

    @admin.action(description="Mark as shipped")
    def mark_as_shipped(self, request, queryset):
        self._set_status(request, queryset, OrderStatus.SHIPPED)

    @admin.action(description="Mark as delivered")
    def mark_as_delivered(self, request, queryset):
        self._set_status(request, queryset, OrderStatus.DELIVERED)

    @admin.action(description="Mark as canceled")
    def mark_as_canceled(self, request, queryset):
        self._set_status(request, queryset, OrderStatus.CANCELED)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('id', 'kind', 'order', 'recipient', 'state', 'attempts', 'next_attempt_at', 'sent_at')
    list_filter = ('kind', 'state')
    readonly_fields = ('kind', 'order', 'recipient', 'payload', 'attempts', 'last_error', 'created_at', 'sent_at')

    actions = ['retry_now']

    @admin.action(description="Retry delivery now")
    def retry_now(self, request, queryset):
        sent = 0
        for notification in queryset.select_related('order', 'recipient'):
            if notification.state == Notification.FAILED:
                notification.state = Notification.PENDING
                notification.save(update_fields=['state'])
            if notifications.deliver(notification):
                sent += 1
        self.message_user(request, f"{sent} notification(s) sent.")
