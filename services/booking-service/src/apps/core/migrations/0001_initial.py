import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Business',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier', primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Creation time')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Last modification time')),
                ('owner_id', models.UUIDField(db_index=True, help_text='Identity-provider user id of the owner')),
                ('name', models.CharField(max_length=255)),
            ],
            options={
                'db_table': 'businesses',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='ServiceOffering',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier', primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Creation time')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Last modification time')),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('duration_minutes', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('capacity', models.PositiveIntegerField(default=1, help_text='Concurrent bookings allowed per window', validators=[django.core.validators.MinValueValidator(1)])),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='service_offerings', to='core.business')),
            ],
            options={
                'db_table': 'service_offerings',
                'ordering': ['business', 'name'],
            },
        ),
        migrations.CreateModel(
            name='OpeningHours',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier', primary_key=True, serialize=False)),
                ('day_of_week', models.IntegerField(choices=[(0, 'Sunday'), (1, 'Monday'), (2, 'Tuesday'), (3, 'Wednesday'), (4, 'Thursday'), (5, 'Friday'), (6, 'Saturday')])),
                ('opens_at', models.TimeField()),
                ('closes_at', models.TimeField()),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='opening_hours', to='core.business')),
            ],
            options={
                'db_table': 'business_opening_hours',
                'ordering': ['business', 'day_of_week'],
                'verbose_name_plural': 'opening hours',
                'constraints': [models.UniqueConstraint(fields=('business', 'day_of_week'), name='unique_opening_hours_per_weekday')],
            },
        ),
        migrations.CreateModel(
            name='Slot',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier', primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Creation time')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Last modification time')),
                ('date', models.DateField(db_index=True)),
                ('start_time', models.TimeField()),
                ('end_time', models.TimeField()),
                ('bookings_count', models.PositiveIntegerField(default=0)),
                ('is_blocked', models.BooleanField(default=False, help_text='Closed by the business regardless of capacity')),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='slots', to='core.business')),
                ('service_offering', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='slots', to='core.serviceoffering')),
            ],
            options={
                'db_table': 'slots',
                'ordering': ['date', 'start_time'],
                'indexes': [models.Index(fields=['business', 'service_offering', 'date'], name='slot_lookup_idx')],
                'constraints': [models.UniqueConstraint(fields=('service_offering', 'date', 'start_time'), name='unique_slot_window')],
            },
        ),
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier', primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Creation time')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Last modification time')),
                ('user_id', models.UUIDField(blank=True, db_index=True, null=True)),
                ('status', models.CharField(choices=[('created', 'Created'), ('pending', 'Pending'), ('confirmed', 'Confirmed'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], db_index=True, default='created', max_length=20)),
                ('special_requests', models.CharField(blank=True, max_length=500, null=True)),
                ('guest_name', models.CharField(blank=True, max_length=100, null=True)),
                ('guest_email', models.EmailField(blank=True, max_length=255, null=True)),
                ('guest_phone', models.CharField(blank=True, max_length=20, null=True)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('service_offering', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='core.serviceoffering')),
                ('slot', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='core.slot')),
            ],
            options={
                'db_table': 'bookings',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user_id', 'status'], name='booking_user_status_idx')],
            },
        ),
    ]
