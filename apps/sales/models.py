# ==========================================
# apps/sales/models.py
# ==========================================

from decimal import Decimal
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


MAX_CATEGORY_LEVEL = 2


class ProductStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'
    ARCHIVED = 'archived', 'Archived'


class Category(models.Model):
    """
    Product category from the POS master.

    Level 1 is the top of the tree. Level 2 categories hang under a
    level-1 parent. Codes are unique across both levels.
    """

    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100)
    level = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_CATEGORY_LEVEL)],
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='children',
    )
    status = models.CharField(max_length=20, choices=ProductStatus.choices, default=ProductStatus.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'categories'
        verbose_name_plural = 'categories'
        ordering = ['level', 'code']

    def __str__(self):
        return f"{self.code} {self.name}"


class Product(models.Model):
    """Item sold by one store. Products are not shared between stores."""

    store = models.ForeignKey('stores.Store', on_delete=models.PROTECT, related_name='products')
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, default='no-image.jpg')
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )
    stock = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=ProductStatus.choices, default=ProductStatus.ACTIVE)
    available_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['store', 'name'], name='products_store_name_idx'),
            models.Index(fields=['status'], name='products_status_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name


class SalesRecord(models.Model):
    """Daily sales of one product in one store."""

    date = models.DateField()
    store = models.ForeignKey('stores.Store', on_delete=models.PROTECT, related_name='sales_records')
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='sales_records')
    quantity = models.IntegerField()
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    sales_amount = models.DecimalField(max_digits=14, decimal_places=2)
    customer_attribute = models.CharField(max_length=100, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sales_records'
        unique_together = [['date', 'store', 'product']]
        indexes = [
            models.Index(fields=['store', '-date'], name='sales_store_date_idx'),
        ]
        ordering = ['-date']

    def __str__(self):
        return f"{self.date} {self.product} x{self.quantity}"
