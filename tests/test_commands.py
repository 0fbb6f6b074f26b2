from decimal import Decimal

import pytest
from django.core.management import call_command

from inventory.models import DEFAULT_IMAGE, Category, MenuItem
from orders.models import Order

pytestmark = pytest.mark.django_db


def test_seed_catalog_is_idempotent():
    call_command('seed_catalog')
    call_command('seed_catalog')

    assert list(Category.objects.values_list('name', flat=True)) == ['Coffee', 'Pastries', 'Beverages']
    assert MenuItem.objects.count() == 13
    assert not MenuItem.objects.exclude(image=DEFAULT_IMAGE).exists()
    assert MenuItem.objects.get(name='Espresso').price == Decimal('3.50')


def test_seed_orders_creates_orders_per_user(customer, other_customer):
    call_command('seed_orders', '--min', '2', '--max', '3', '--seed', '7')

    for user in (customer, other_customer):
        orders = Order.objects.filter(user=user)
        assert 2 <= orders.count() <= 3
        for order in orders:
            assert order.total_amount == order.calculate_totals()
            assert order.status in Order.status_values()


def test_seed_orders_without_users(capsys):
    call_command('seed_orders')

    assert 'No users found' in capsys.readouterr().out
    assert not Order.objects.exists()


class TestImageStore:
    def test_store_and_delete(self, image_store):
        path = image_store.store(b'fake image bytes', 'Latte.PNG')

        assert path.startswith('menu-items/')
        assert path.endswith('.png')
        assert image_store.exists(path)
        assert image_store.delete(path) is True
        assert not image_store.exists(path)
        assert image_store.delete(path) is False

    def test_default_image_is_never_deleted(self, image_store):
        assert image_store.delete(DEFAULT_IMAGE) is False
        assert image_store.delete('') is False
        assert image_store.delete(None) is False
