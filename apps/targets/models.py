# ==========================================
# apps/targets/models.py
# ==========================================

from decimal import Decimal
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MIN_TARGET_YEAR = 2020
MAX_TARGET_YEAR = 2030


class TargetAmounts(models.Model):
    """Goal figures shared by every level of the target tree."""

    target_sales_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    target_customer_count = models.PositiveIntegerField()
    target_total_items_sold = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class AllocatedTarget(TargetAmounts):
    """A target that receives a fraction of its parent's goal."""

    allocation_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=4,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('1'))],
    )

    class Meta:
        abstract = True


class AnnualTarget(TargetAmounts):
    """Yearly sales goal for one store. Root of the allocation tree."""

    year = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_TARGET_YEAR), MaxValueValidator(MAX_TARGET_YEAR)],
    )
    store = models.ForeignKey('stores.Store', on_delete=models.PROTECT, related_name='annual_targets')

    class Meta:
        db_table = 'annual_targets'
        unique_together = [['year', 'store']]
        ordering = ['-year', 'store_id']

    def __str__(self):
        return f"{self.store.name} {self.year}"


class MonthlyTarget(AllocatedTarget):
    """Share of an annual target assigned to one calendar month."""

    annual_target = models.ForeignKey(AnnualTarget, on_delete=models.PROTECT, related_name='monthly_targets')
    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )

    class Meta:
        db_table = 'monthly_targets'
        unique_together = [['annual_target', 'month']]
        ordering = ['month']

    def __str__(self):
        return f"{self.annual_target} / {self.month:02d}"

    def covers(self, day):
        return (day.year, day.month) == (self.annual_target.year, self.month)


class WeeklyTarget(AllocatedTarget):
    """Share of a monthly target assigned to a date range."""

    monthly_target = models.ForeignKey(MonthlyTarget, on_delete=models.PROTECT, related_name='weekly_targets')
    start_date = models.DateField()
    end_date = models.DateField()

    class Meta:
        db_table = 'weekly_targets'
        unique_together = [['monthly_target', 'start_date']]
        ordering = ['start_date']

    def __str__(self):
        return f"{self.monthly_target} / {self.start_date}..{self.end_date}"

    def covers(self, day):
        return self.start_date <= day <= self.end_date


class DailyTarget(AllocatedTarget):
    """Share of a weekly target assigned to a single day."""

    weekly_target = models.ForeignKey(WeeklyTarget, on_delete=models.PROTECT, related_name='daily_targets')
    date = models.DateField()

    class Meta:
        db_table = 'daily_targets'
        unique_together = [['weekly_target', 'date']]
        ordering = ['date']

    def __str__(self):
        return f"{self.weekly_target.monthly_target} / {self.date}"
