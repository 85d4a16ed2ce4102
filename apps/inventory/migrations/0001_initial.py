import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('barcode', models.CharField(max_length=50, unique=True)),
                ('item_name', models.CharField(max_length=255)),
                ('category', models.CharField(blank=True, max_length=100)),
                ('weight', models.DecimalField(decimal_places=3, help_text='Grams', max_digits=10)),
                ('purity', models.CharField(blank=True, help_text='e.g., 22K, 916', max_length=20)),
                ('making_charges', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('stone_type', models.CharField(blank=True, max_length=100)),
                ('hsn_code', models.CharField(blank=True, max_length=20)),
                ('gst_rate', models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ('price_per_gram', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('net_price', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('stock_status', models.CharField(choices=[('in_stock', 'In Stock'), ('reserved', 'Reserved'), ('sold', 'Sold'), ('returned', 'Returned')], db_index=True, default='in_stock', max_length=20)),
                ('location', models.CharField(blank=True, max_length=100)),
                ('remarks', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'items',
                'ordering': ['item_name'],
            },
        ),
        migrations.CreateModel(
            name='GoldRate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('rate_per_gram', models.DecimalField(decimal_places=2, max_digits=10)),
                ('effective_date', models.DateField(default=django.utils.timezone.localdate, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'gold_rates',
                'ordering': ['-effective_date'],
            },
        ),
    ]
