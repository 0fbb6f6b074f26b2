from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from inventory.models import DEFAULT_IMAGE, Category, MenuItem

CATEGORIES = [
    ('Coffee', 'Hot and cold coffee beverages', 1),
    ('Pastries', 'Fresh baked goods and desserts', 2),
    ('Beverages', 'Non-coffee drinks and refreshments', 3),
]

MENU_ITEMS = {
    'Coffee': [
        ('Espresso', 'Rich and bold single shot', '3.50'),
        ('Americano', 'Espresso with hot water', '3.00'),
        ('Latte', 'Espresso with steamed milk', '4.50'),
        ('Cappuccino', 'Espresso with steamed milk and foam', '4.00'),
        ('Mocha', 'Chocolate and espresso with milk', '5.00'),
    ],
    'Pastries': [
        ('Croissant', 'Buttery and flaky', '4.00'),
        ('Blueberry Muffin', 'Fresh baked with blueberries', '3.25'),
        ('Bagel', 'Toasted with cream cheese', '3.50'),
        ('Danish Pastry', 'Sweet and delicious', '3.75'),
    ],
    'Beverages': [
        ('Orange Juice', 'Fresh squeezed', '3.75'),
        ('Fruit Smoothie', 'Mixed berries and banana', '5.50'),
        ('Hot Chocolate', 'Rich chocolate with whipped cream', '4.25'),
        ('Iced Tea', 'Freshly brewed and chilled', '3.00'),
    ],
}


class Command(BaseCommand):
    help = 'Create the default coffee shop categories and menu items'

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for name, description, sort_order in CATEGORIES:
            category, _ = Category.objects.get_or_create(
                name=name,
                defaults={'description': description, 'is_active': True, 'sort_order': sort_order},
            )
            for item_name, item_description, price in MENU_ITEMS[name]:
                _, was_created = MenuItem.objects.get_or_create(
                    name=item_name,
                    category=category,
                    defaults={
                        'description': item_description,
                        'price': Decimal(price),
                        'is_available': True,
                        'image': DEFAULT_IMAGE,
                    },
                )
                created += int(was_created)

        self.stdout.write(self.style.SUCCESS(f'Seeded catalog: {created} new menu items'))
