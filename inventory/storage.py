import logging
import os
import uuid

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from .models import DEFAULT_IMAGE

logger = logging.getLogger(__name__)


class ImageStore:
    """
    Stores menu item images in a Django storage backend.

    The placeholder path is shared by every item without an upload, so it
    is never written or deleted through this class.
    """
    upload_to = 'menu-items'
    default_path = DEFAULT_IMAGE

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else default_storage

    def store(self, content, filename=''):
        """Save raw bytes and return the stored path"""
        extension = os.path.splitext(filename)[1].lower()
        name = f"{self.upload_to}/{uuid.uuid4().hex}{extension}"
        path = self.storage.save(name, ContentFile(content))
        logger.info("Stored image %s (%d bytes)", path, len(content))
        return path

    def delete(self, path):
        if not path or path == self.default_path:
            return False
        if not self.storage.exists(path):
            return False
        self.storage.delete(path)
        logger.info("Released image %s", path)
        return True

    def exists(self, path):
        return bool(path) and self.storage.exists(path)

    def url(self, path):
        return self.storage.url(path or self.default_path)


def get_image_store():
    return ImageStore()
