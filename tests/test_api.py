"""HTTP endpoints: permissions, status codes and the error envelope."""

import pytest
from django.urls import reverse

from authentication.models import Role
from inventory.models import DEFAULT_IMAGE, Category, MenuItem
from orders.models import Order
from .factories import PASSWORD, CategoryFactory, MenuItemFactory

pytestmark = pytest.mark.django_db

ORDER_PAYLOAD = {
    'items': [
        {'name': 'Espresso', 'quantity': 2, 'price': '3.50'},
        {'name': 'Croissant', 'quantity': 1, 'price': '4.00'},
    ],
}


class TestAuthentication:
    def test_register_and_login(self, api_client):
        response = api_client.post(reverse('register'), {
            'email': 'new@coffeeshop.test',
            'first_name': 'Nova',
            'last_name': 'Barista',
            'password': PASSWORD,
            'confirm_password': PASSWORD,
        }, format='json')
        assert response.status_code == 201
        assert response.data['role']['name'] == Role.USER
        assert response.data['is_admin'] is False

        response = api_client.post(reverse('token_obtain_pair'), {
            'email': 'new@coffeeshop.test',
            'password': PASSWORD,
        }, format='json')
        assert response.status_code == 200
        assert response.data['access']
        assert response.data['user']['email'] == 'new@coffeeshop.test'

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        assert api_client.get(reverse('my_profile')).data['email'] == 'new@coffeeshop.test'

    def test_register_rejects_mismatched_passwords(self, api_client):
        response = api_client.post(reverse('register'), {
            'email': 'new@coffeeshop.test',
            'password': PASSWORD,
            'confirm_password': 'something else',
        }, format='json')

        assert response.status_code == 400
        assert response.data['error'] is True
        assert 'confirm_password' in response.data['details']

    def test_anonymous_requests_are_rejected(self, api_client):
        response = api_client.get(reverse('orders:order-list-create'))

        assert response.status_code == 401
        assert response.data['message'] == 'Authentication required'


class TestRoles:
    def test_admin_changes_user_role(self, admin_api, customer):
        admin_role = Role.objects.get(name=Role.ADMIN)

        response = admin_api.patch(
            reverse('update_user_role', args=[customer.pk]), {'role_id': admin_role.pk}, format='json'
        )

        assert response.status_code == 200
        assert response.data['is_admin'] is True

    def test_unknown_role_is_a_validation_error(self, admin_api, customer):
        response = admin_api.patch(
            reverse('update_user_role', args=[customer.pk]), {'role_id': 999999}, format='json'
        )

        assert response.status_code == 400
        assert 'role_id' in response.data['details']

    def test_customer_cannot_change_roles(self, customer_api, other_customer):
        admin_role = Role.objects.get(name=Role.ADMIN)

        response = customer_api.patch(
            reverse('update_user_role', args=[other_customer.pk]), {'role_id': admin_role.pk}, format='json'
        )

        assert response.status_code == 403
        assert response.data['message'] == 'Permission denied'

    def test_role_screens_are_admin_only(self, admin_api, customer_api):
        assert admin_api.get(reverse('role_list')).status_code == 200
        assert admin_api.get(reverse('user_role_list')).status_code == 200
        assert customer_api.get(reverse('role_list')).status_code == 403
        assert customer_api.get(reverse('user_role_list')).status_code == 403


class TestCatalogEndpoints:
    def test_admin_creates_category(self, admin_api):
        response = admin_api.post(
            reverse('category-list-create'),
            {'name': 'Coffee', 'description': 'Hot drinks', 'sort_order': 1},
            format='json'
        )

        assert response.status_code == 201
        assert response.data['name'] == 'Coffee'
        assert response.data['menu_items_count'] == 0

    def test_duplicate_category_is_rejected(self, admin_api):
        CategoryFactory(name='Coffee')

        response = admin_api.post(reverse('category-list-create'), {'name': 'Coffee'}, format='json')

        assert response.status_code == 400
        assert response.data['message'] == 'Validation error'
        assert 'name' in response.data['details']

    def test_customer_cannot_create_category(self, customer_api):
        response = customer_api.post(reverse('category-list-create'), {'name': 'Coffee'}, format='json')

        assert response.status_code == 403
        assert not Category.objects.exists()

    def test_customer_can_list_categories(self, customer_api):
        CategoryFactory(name='Coffee', sort_order=1)
        CategoryFactory(name='Old', is_active=False)

        response = customer_api.get(reverse('category-list-create'), {'active_only': 'true'})

        assert response.status_code == 200
        assert [c['name'] for c in response.data] == ['Coffee']

    def test_deleting_referenced_category_conflicts(self, admin_api):
        item = MenuItemFactory()

        response = admin_api.delete(reverse('category-detail', args=[item.category_id]))

        assert response.status_code == 409
        assert response.data['message'] == 'Conflict'
        assert Category.objects.filter(pk=item.category_id).exists()

    def test_delete_empty_category(self, admin_api):
        category = CategoryFactory()

        response = admin_api.delete(reverse('category-detail', args=[category.pk]))

        assert response.status_code == 204

    def test_unknown_category_is_404(self, admin_api):
        response = admin_api.patch(reverse('category-detail', args=[999999]), {'name': 'Tea'}, format='json')

        assert response.status_code == 404
        assert response.data['message'] == 'Resource not found'

    def test_create_menu_item_with_image(self, admin_api, image_store, png_upload):
        category = CategoryFactory()

        response = admin_api.post(reverse('menu-item-list-create'), {
            'name': 'Latte',
            'description': 'Espresso with steamed milk',
            'price': '4.50',
            'category_id': category.pk,
            'is_available': 'true',
            'image': png_upload(),
        }, format='multipart')

        assert response.status_code == 201
        assert response.data['category']['id'] == category.pk
        assert response.data['image'] != DEFAULT_IMAGE
        assert image_store.exists(response.data['image'])

    def test_create_menu_item_without_image(self, admin_api):
        category = CategoryFactory()

        response = admin_api.post(reverse('menu-item-list-create'), {
            'name': 'Water',
            'description': 'Still',
            'price': '0',
            'category_id': category.pk,
        }, format='json')

        assert response.status_code == 201
        assert response.data['image'] == DEFAULT_IMAGE
        assert response.data['price'] == '0.00'

    def test_negative_price_is_rejected(self, admin_api):
        category = CategoryFactory()

        response = admin_api.post(reverse('menu-item-list-create'), {
            'name': 'Espresso',
            'description': 'Single shot',
            'price': '-0.01',
            'category_id': category.pk,
        }, format='json')

        assert response.status_code == 400
        assert 'price' in response.data['details']
        assert not MenuItem.objects.exists()

    def test_update_and_delete_menu_item(self, admin_api):
        item = MenuItemFactory(name='Latte')

        response = admin_api.patch(
            reverse('menu-item-detail', args=[item.pk]), {'is_available': False}, format='json'
        )
        assert response.status_code == 200
        assert response.data['is_available'] is False

        response = admin_api.delete(reverse('menu-item-detail', args=[item.pk]))
        assert response.status_code == 204
        assert not MenuItem.objects.filter(pk=item.pk).exists()

    def test_customer_menu_lists_available_items(self, customer_api):
        MenuItemFactory(name='Mocha')
        MenuItemFactory(name='Americano')
        MenuItemFactory(name='Sold Out', is_available=False)

        response = customer_api.get(reverse('customer-menu'))

        assert response.status_code == 200
        assert [i['name'] for i in response.data] == ['Americano', 'Mocha']
        assert response.data[0]['category']['name']


class TestOrderEndpoints:
    def test_place_order(self, customer_api, customer):
        response = customer_api.post(reverse('orders:order-list-create'), ORDER_PAYLOAD, format='json')

        assert response.status_code == 201
        assert response.data['total_amount'] == '11.00'
        assert response.data['status'] == Order.PENDING
        assert response.data['user_id'] == customer.pk
        assert [i['line_total'] for i in response.data['items']] == ['7.00', '4.00']

    def test_empty_order_is_rejected(self, customer_api):
        response = customer_api.post(reverse('orders:order-list-create'), {'items': []}, format='json')

        assert response.status_code == 400
        assert 'items' in response.data['details']

    def test_status_update_flow(self, admin_api, customer_api):
        order_id = customer_api.post(
            reverse('orders:order-list-create'), ORDER_PAYLOAD, format='json'
        ).data['id']
        status_url = reverse('orders:order-status', args=[order_id])

        response = customer_api.patch(status_url, {'status': Order.COMPLETED}, format='json')
        assert response.status_code == 403

        response = admin_api.patch(status_url, {'status': 'shipped'}, format='json')
        assert response.status_code == 400

        response = admin_api.patch(status_url, {'status': Order.COMPLETED}, format='json')
        assert response.status_code == 200
        assert response.data['status'] == Order.COMPLETED

        listed = customer_api.get(reverse('orders:order-list-create')).data
        assert [(o['id'], o['status']) for o in listed] == [(order_id, Order.COMPLETED)]

    def test_status_update_unknown_order(self, admin_api):
        response = admin_api.patch(
            reverse('orders:order-status', args=[999999]), {'status': Order.COMPLETED}, format='json'
        )
        assert response.status_code == 404

    def test_admin_listing_includes_owner(self, admin_api, customer_api, customer):
        customer_api.post(reverse('orders:order-list-create'), ORDER_PAYLOAD, format='json')

        listed = admin_api.get(reverse('orders:order-list-create')).data

        assert listed[0]['user']['email'] == customer.email

    def test_customer_cannot_read_other_orders(self, customer_api, other_customer):
        from orders import services
        order = services.place_order(other_customer, ORDER_PAYLOAD['items'])

        response = customer_api.get(reverse('orders:order-detail', args=[order.pk]))

        assert response.status_code == 404

    def test_recent_orders(self, customer_api):
        for _ in range(6):
            customer_api.post(reverse('orders:order-list-create'), ORDER_PAYLOAD, format='json')

        response = customer_api.get(reverse('orders:recent-orders'))

        assert response.status_code == 200
        assert len(response.data) == 5
