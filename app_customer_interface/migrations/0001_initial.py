from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('app_owner_admin_panel', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('order_id', models.AutoField(primary_key=True, serialize=False)),
                ('table', models.CharField(max_length=50)),
                ('status', models.CharField(choices=[('pending', 'pending'), ('served', 'served'), ('paid', 'paid')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('served_at', models.DateTimeField(blank=True, null=True)),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='app_owner_admin_panel.restaurant')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['restaurant', 'created_at'], name='order_restaurant_created_idx'),
                    models.Index(fields=['table', 'status'], name='order_table_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('order_item_id', models.AutoField(primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('quantity', models.PositiveIntegerField()),
                ('price', models.DecimalField(decimal_places=2, max_digits=8)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='app_customer_interface.order')),
            ],
            options={
                'ordering': ['order_item_id'],
            },
        ),
        migrations.CreateModel(
            name='ServiceRequest',
            fields=[
                ('request_id', models.AutoField(primary_key=True, serialize=False)),
                ('table', models.CharField(max_length=50)),
                ('request_type', models.CharField(choices=[('waiter', 'Call waiter'), ('bill', 'Request bill')], max_length=10)),
                ('status', models.CharField(choices=[('pending', 'pending'), ('resolved', 'resolved')], default='pending', max_length=10)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='app_owner_admin_panel.restaurant')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['restaurant', 'status'], name='request_restaurant_status_idx'),
                ],
            },
        ),
    ]
