from decimal import Decimal

import factory

from authentication.models import CustomUser, Role
from inventory.models import Category, MenuItem

PASSWORD = 'SecurePassword123!'


class RoleFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Role
        django_get_or_create = ('name',)

    name = Role.USER


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CustomUser

    email = factory.Sequence(lambda n: f'customer{n}@coffeeshop.test')
    first_name = 'Casey'
    last_name = factory.Sequence(lambda n: f'Customer{n}')
    password = factory.django.Password(PASSWORD)
    role = factory.SubFactory(RoleFactory)


class AdminFactory(UserFactory):
    email = factory.Sequence(lambda n: f'admin{n}@coffeeshop.test')
    role = factory.SubFactory(RoleFactory, name=Role.ADMIN)


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f'Category {n}')
    description = 'Hot and cold coffee beverages'
    is_active = True
    sort_order = 0


class MenuItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = MenuItem

    category = factory.SubFactory(CategoryFactory)
    name = factory.Sequence(lambda n: f'Item {n}')
    description = 'Rich and bold single shot'
    price = Decimal('3.50')
    is_available = True
