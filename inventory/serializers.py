from django.conf import settings
from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from .models import Category, MenuItem
from .storage import get_image_store


class CategorySerializer(serializers.ModelSerializer):
    menu_items_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = [
            'id', 'name', 'description', 'is_active', 'sort_order',
            'menu_items_count', 'created_at', 'updated_at'
        ]
        read_only_fields = ['created_at', 'updated_at', 'menu_items_count']

    def get_menu_items_count(self, obj):
        count = getattr(obj, 'menu_items_count', None)
        if count is None:
            count = obj.menu_items.count()
        return count


class CategoryWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['name', 'description', 'is_active', 'sort_order']
        extra_kwargs = {'name': {'validators': []}}

    def validate_name(self, value):
        """Validate unique category name"""
        queryset = Category.objects.filter(name=value)
        if self.instance:
            queryset = queryset.exclude(id=self.instance.id)
        if queryset.exists():
            raise serializers.ValidationError("Category with this name already exists.")
        return value


class CategorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'is_active', 'sort_order']


def validate_image_size(upload):
    max_size = settings.MENU_ITEM_IMAGE_MAX_SIZE
    if upload.size > max_size:
        raise serializers.ValidationError(
            f"Image may not be larger than {max_size // 1024} kilobytes."
        )


class MenuItemSerializer(serializers.ModelSerializer):
    category_id = serializers.IntegerField(read_only=True)
    category = CategorySummarySerializer(read_only=True)
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = MenuItem
        fields = [
            'id', 'name', 'description', 'price', 'category_id', 'category',
            'is_available', 'image', 'image_url', 'created_at', 'updated_at'
        ]

    def get_image_url(self, obj):
        return get_image_store().url(obj.image)


class MenuItemWriteSerializer(serializers.ModelSerializer):
    category_id = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        source='category'
    )
    image = serializers.FileField(
        required=False,
        write_only=True,
        validators=[
            FileExtensionValidator(settings.MENU_ITEM_IMAGE_EXTENSIONS),
            validate_image_size,
        ]
    )

    class Meta:
        model = MenuItem
        fields = ['name', 'description', 'price', 'category_id', 'is_available', 'image']
