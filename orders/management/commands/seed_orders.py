import random
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from orders import services
from orders.models import Order

SAMPLE_ITEMS = [
    [
        {'name': 'Espresso', 'quantity': 2, 'price': '3.50'},
        {'name': 'Croissant', 'quantity': 1, 'price': '4.00'},
    ],
    [
        {'name': 'Latte', 'quantity': 1, 'price': '4.50'},
        {'name': 'Muffin', 'quantity': 2, 'price': '3.25'},
    ],
    [
        {'name': 'Cappuccino', 'quantity': 3, 'price': '4.00'},
    ],
    [
        {'name': 'Americano', 'quantity': 1, 'price': '3.00'},
        {'name': 'Bagel', 'quantity': 1, 'price': '3.50'},
        {'name': 'Orange Juice', 'quantity': 1, 'price': '3.75'},
    ],
]


class Command(BaseCommand):
    help = 'Create sample orders for every user'

    def add_arguments(self, parser):
        parser.add_argument('--min', type=int, default=2, help='Minimum orders per user')
        parser.add_argument('--max', type=int, default=5, help='Maximum orders per user')
        parser.add_argument('--seed', type=int, default=None, help='Random seed')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        users = get_user_model().objects.all()
        if not users.exists():
            self.stdout.write(self.style.WARNING('No users found, nothing to seed'))
            return

        created = 0
        for user in users:
            for _ in range(rng.randint(options['min'], options['max'])):
                order = services.place_order(
                    user,
                    rng.choice(SAMPLE_ITEMS),
                    notes='Extra sugar please' if rng.randint(0, 2) == 0 else None,
                )
                # Spread sample orders over statuses and the last month
                Order.objects.filter(pk=order.pk).update(
                    status=rng.choice(Order.status_values()),
                    created_at=timezone.now() - timedelta(days=rng.randint(0, 30)),
                )
                created += 1

        self.stdout.write(self.style.SUCCESS(f'Seeded {created} orders'))
