"""
Order lifecycle: placement from a cart snapshot, status updates and listings.
"""
import logging

from django.conf import settings
from django.db import transaction

from authentication.exceptions import NotFoundError, ValidationError
from authentication.permissions import is_admin, require_admin
from .models import Order, OrderItem, round_currency
from .serializers import OrderCreateSerializer

logger = logging.getLogger(__name__)


def compute_total(line_items):
    """Sum of quantity x price over the line items, rounded to 2 places"""
    return round_currency(sum(
        (item['price'] * item['quantity'] for item in line_items),
        0
    ))


def place_order(actor, line_items, notes=None):
    """
    Create a pending order for `actor` from a list of
    {name, quantity, price} snapshots.
    """
    serializer = OrderCreateSerializer(data={'items': line_items, 'notes': notes})
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)

    items = serializer.validated_data['items']
    total = compute_total(items)

    with transaction.atomic():
        order = Order.objects.create(
            user=actor,
            total_amount=total,
            status=Order.PENDING,
            notes=serializer.validated_data.get('notes'),
        )
        OrderItem.objects.bulk_create([
            OrderItem(order=order, name=item['name'], quantity=item['quantity'], price=item['price'])
            for item in items
        ])

    logger.info("Order %s placed by %s: %d items, total %s", order.pk, actor.pk, len(items), total)
    return order


def _orders_with_items():
    return Order.objects.select_related('user', 'user__role').prefetch_related('items')


def get_order(order_id, actor):
    """Admins see any order, everyone else only their own"""
    queryset = _orders_with_items()
    if not is_admin(actor):
        queryset = queryset.filter(user=actor)
    try:
        return queryset.get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise NotFoundError('Order not found.')


@transaction.atomic
def update_status(order_id, new_status, actor):
    # Role check comes before the lookup so non-admins learn nothing about ids
    require_admin(actor, 'update orders')

    try:
        order = Order.objects.select_for_update().get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise NotFoundError('Order not found.')

    if new_status not in Order.status_values():
        raise ValidationError({
            'status': [f"Status must be one of: {', '.join(Order.status_values())}."]
        })

    if settings.ORDER_STRICT_STATUS_TRANSITIONS and not order.can_transition_to(new_status):
        raise ValidationError({
            'status': [f"Cannot move an order from {order.status} to {new_status}."]
        })

    previous = order.status
    order.status = new_status
    order.save(update_fields=['status', 'updated_at'])
    logger.info("Order %s status %s -> %s by %s", order.pk, previous, new_status, actor.pk)
    return order


def list_orders(actor, status=None):
    """All orders for admins, otherwise the actor's own; newest first"""
    queryset = _orders_with_items()
    if not is_admin(actor):
        queryset = queryset.filter(user=actor)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at', '-id')


def recent_orders(actor, limit=5):
    return list(
        _orders_with_items().filter(user=actor).order_by('-created_at', '-id')[:limit]
    )
