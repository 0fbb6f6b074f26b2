"""
Catalog operations: categories and menu items.

Every mutating operation takes the acting user first and checks the admin
role before touching the database.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count

from authentication.exceptions import ConflictError, NotFoundError, ValidationError
from authentication.permissions import require_admin
from .models import DEFAULT_IMAGE, Category, MenuItem
from .serializers import CategoryWriteSerializer, MenuItemWriteSerializer
from .storage import get_image_store

logger = logging.getLogger(__name__)


def _validated(serializer):
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return serializer


def _store_upload(upload):
    return get_image_store().store(upload.read(), upload.name)


def _save_item(serializer, stored_path=None, **extra):
    """Save the item, releasing a freshly stored image if the write fails"""
    try:
        with transaction.atomic():
            return serializer.save(**extra)
    except Exception:
        if stored_path:
            logger.warning("Releasing image %s after failed save", stored_path)
            get_image_store().delete(stored_path)
        raise


# =============== CATEGORIES ===============

def list_categories(active_only=False):
    queryset = Category.objects.annotate(menu_items_count=Count('menu_items'))
    if active_only:
        queryset = queryset.active()
    return queryset.ordered()


def get_category(category_id):
    try:
        return Category.objects.annotate(
            menu_items_count=Count('menu_items')
        ).get(pk=category_id)
    except (Category.DoesNotExist, ValueError, TypeError):
        raise NotFoundError('Category not found.')


def _save_category(serializer):
    try:
        with transaction.atomic():
            return serializer.save()
    except IntegrityError:
        # Lost a race with a concurrent create of the same name
        raise ValidationError({'name': ['Category with this name already exists.']})


def create_category(actor, name, description=None, is_active=True, sort_order=0):
    require_admin(actor, 'manage categories')

    serializer = _validated(CategoryWriteSerializer(data={
        'name': name,
        'description': description,
        'is_active': is_active,
        'sort_order': sort_order,
    }))
    category = _save_category(serializer)
    logger.info("Category %s '%s' created by %s", category.pk, category.name, actor.pk)
    return category


def update_category(actor, category_id, **fields):
    require_admin(actor, 'manage categories')

    category = get_category(category_id)
    serializer = _validated(CategoryWriteSerializer(category, data=fields, partial=True))
    category = _save_category(serializer)
    logger.info("Category %s updated by %s", category.pk, actor.pk)
    return category


@transaction.atomic
def delete_category(actor, category_id):
    require_admin(actor, 'manage categories')

    category = get_category(category_id)
    if category.menu_items.exists():
        logger.warning(
            "Refused to delete category %s: still referenced by menu items", category.pk
        )
        raise ConflictError('Cannot delete category with existing menu items.')

    category.delete()
    logger.info("Category %s deleted by %s", category_id, actor.pk)


# =============== MENU ITEMS ===============

def list_menu_items(available_only=False, with_category=True):
    queryset = MenuItem.objects.all()
    if available_only:
        queryset = queryset.filter(is_available=True)
    if with_category:
        queryset = queryset.select_related('category')
    return queryset.order_by('name')


def get_menu_item(item_id):
    try:
        return MenuItem.objects.select_related('category').get(pk=item_id)
    except (MenuItem.DoesNotExist, ValueError, TypeError):
        raise NotFoundError('Menu item not found.')


def create_menu_item(actor, name, description, price, category_id, is_available=True, image=None):
    """
    Create a menu item. `image` is an uploaded file; without one the item
    points at the shared placeholder image.
    """
    require_admin(actor, 'manage the menu')

    data = {
        'name': name,
        'description': description,
        'price': price,
        'category_id': category_id,
        'is_available': is_available,
    }
    if image is not None:
        data['image'] = image
    serializer = _validated(MenuItemWriteSerializer(data=data))

    upload = serializer.validated_data.pop('image', None)
    image_path = _store_upload(upload) if upload is not None else DEFAULT_IMAGE

    item = _save_item(
        serializer, image_path if upload is not None else None, image=image_path
    )
    logger.info("Menu item %s '%s' created by %s", item.pk, item.name, actor.pk)
    return item


def update_menu_item(actor, item_id, image=None, **fields):
    """
    Update a menu item. A new image replaces the stored one, and the old
    file is released unless it is the placeholder.
    """
    require_admin(actor, 'manage the menu')

    item = get_menu_item(item_id)
    data = dict(fields)
    if image is not None:
        data['image'] = image
    serializer = _validated(MenuItemWriteSerializer(item, data=data, partial=True))

    upload = serializer.validated_data.pop('image', None)
    previous_image = item.image
    extra = {}
    if upload is not None:
        extra['image'] = _store_upload(upload)

    item = _save_item(serializer, extra.get('image'), **extra)

    if upload is not None and previous_image != DEFAULT_IMAGE:
        get_image_store().delete(previous_image)
    logger.info("Menu item %s updated by %s", item.pk, actor.pk)
    return item


def delete_menu_item(actor, item_id):
    require_admin(actor, 'manage the menu')

    item = get_menu_item(item_id)
    image_path = item.image
    item.delete()

    get_image_store().delete(image_path)
    logger.info("Menu item %s deleted by %s", item_id, actor.pk)
