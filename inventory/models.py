from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal

from authentication.models import TimeStampedModel

DEFAULT_IMAGE = 'menu-items/defaultfoodimage.png'


class CategoryQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def ordered(self):
        return self.order_by('sort_order', 'name')


class Category(TimeStampedModel):
    """Menu categories"""
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)

    objects = CategoryQuerySet.as_manager()

    def __str__(self):
        return str(self.name)

    class Meta:
        db_table = 'categories'
        ordering = ['sort_order', 'name']
        verbose_name_plural = "Categories"


class MenuItem(TimeStampedModel):
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="menu_items")
    name = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    is_available = models.BooleanField(default=True)

    # Path in the image blob store
    image = models.CharField(max_length=255, default=DEFAULT_IMAGE)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'menu_items'
        ordering = ['name']
