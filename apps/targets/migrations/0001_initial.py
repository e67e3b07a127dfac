from decimal import Decimal
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('stores', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='AnnualTarget',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('target_sales_amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('target_customer_count', models.PositiveIntegerField()),
                ('target_total_items_sold', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('year', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(2020), django.core.validators.MaxValueValidator(2030)])),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='annual_targets', to='stores.store')),
            ],
            options={
                'db_table': 'annual_targets',
                'ordering': ['-year', 'store_id'],
                'unique_together': {('year', 'store')},
            },
        ),
        migrations.CreateModel(
            name='MonthlyTarget',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('target_sales_amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('target_customer_count', models.PositiveIntegerField()),
                ('target_total_items_sold', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('allocation_percentage', models.DecimalField(decimal_places=4, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('1'))])),
                ('month', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('annual_target', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='monthly_targets', to='targets.annualtarget')),
            ],
            options={
                'db_table': 'monthly_targets',
                'ordering': ['month'],
                'unique_together': {('annual_target', 'month')},
            },
        ),
        migrations.CreateModel(
            name='WeeklyTarget',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('target_sales_amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('target_customer_count', models.PositiveIntegerField()),
                ('target_total_items_sold', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('allocation_percentage', models.DecimalField(decimal_places=4, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('1'))])),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('monthly_target', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='weekly_targets', to='targets.monthlytarget')),
            ],
            options={
                'db_table': 'weekly_targets',
                'ordering': ['start_date'],
                'unique_together': {('monthly_target', 'start_date')},
            },
        ),
        migrations.CreateModel(
            name='DailyTarget',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('target_sales_amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('target_customer_count', models.PositiveIntegerField()),
                ('target_total_items_sold', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('allocation_percentage', models.DecimalField(decimal_places=4, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('1'))])),
                ('date', models.DateField()),
                ('weekly_target', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='daily_targets', to='targets.weeklytarget')),
            ],
            options={
                'db_table': 'daily_targets',
                'ordering': ['date'],
                'unique_together': {('weekly_target', 'date')},
            },
        ),
    ]
