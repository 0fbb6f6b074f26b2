from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal, ROUND_HALF_UP

from authentication.models import TimeStampedModel

CENT = Decimal('0.01')


def round_currency(amount):
    """Round to currency precision (2 places, half up)"""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


class Order(TimeStampedModel):
    PENDING = 'pending'
    PROCESSING = 'processing'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    status_options = (
        (PENDING, "Pending"),
        (PROCESSING, "Processing"),
        (COMPLETED, "Completed"),
        (CANCELLED, "Cancelled"),
    )

    # Forward-only graph used when ORDER_STRICT_STATUS_TRANSITIONS is on
    STRICT_TRANSITIONS = {
        PENDING: {PENDING, PROCESSING, CANCELLED},
        PROCESSING: {PROCESSING, COMPLETED, CANCELLED},
        COMPLETED: {COMPLETED},
        CANCELLED: {CANCELLED},
    }

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='orders')
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(max_length=20, choices=status_options, default=PENDING)
    notes = models.TextField(null=True, blank=True)

    @classmethod
    def status_values(cls):
        return [value for value, _ in cls.status_options]

    def calculate_totals(self):
        """Recalculate the order total from its line items"""
        total = sum(
            (item.line_total for item in self.items.all()),
            Decimal('0.00')
        )
        self.total_amount = round_currency(total)
        return self.total_amount

    def can_transition_to(self, new_status):
        return new_status in self.STRICT_TRANSITIONS.get(self.status, set())

    def __str__(self):
        return f"#{self.id} - {self.user} - {self.status}"

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at', '-id']


class OrderItem(models.Model):
    """Line item snapshot: name and price are copied, not linked to the menu"""
    order = models.ForeignKey(Order, related_name='items', on_delete=models.CASCADE)
    name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    # Unit price as submitted; only the order total is rounded to cents
    price = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    @property
    def line_total(self):
        return self.price * self.quantity

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    class Meta:
        db_table = 'order_items'
        ordering = ['id']
