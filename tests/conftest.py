import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from inventory.storage import get_image_store
from .factories import AdminFactory, UserFactory

PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01'
    b'\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f'
    b'\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82'
)


@pytest.fixture(autouse=True)
def in_memory_storage(settings):
    """Keep uploaded images out of MEDIA_ROOT"""
    settings.STORAGES = {
        'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
        'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
    }
    settings.ORDER_STRICT_STATUS_TRANSITIONS = False


@pytest.fixture
def image_store():
    return get_image_store()


@pytest.fixture
def png_upload():
    def make(name='latte.png', content=PNG_BYTES):
        return SimpleUploadedFile(name, content, content_type='image/png')
    return make


@pytest.fixture
def shop_admin(db):
    return AdminFactory()


@pytest.fixture
def customer(db):
    return UserFactory()


@pytest.fixture
def other_customer(db):
    return UserFactory()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_api(shop_admin):
    client = APIClient()
    client.force_authenticate(user=shop_admin)
    return client


@pytest.fixture
def customer_api(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client
