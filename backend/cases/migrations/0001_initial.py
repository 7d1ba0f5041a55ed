# Generated manually: missing-person cases, status audit trail and tips.

import cases.models
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Case',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
                ('name', models.CharField(max_length=255, verbose_name='Name')),
                ('age', models.PositiveSmallIntegerField(verbose_name='Age')),
                ('status', models.CharField(db_index=True, default='Missing', max_length=50, verbose_name='Current Status')),
                ('last_seen', models.CharField(max_length=500, verbose_name='Last Seen Location')),
                ('date', models.DateField(db_index=True, verbose_name='Date Last Seen')),
                ('last_seen_lat', models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True, verbose_name='Last Seen Latitude')),
                ('last_seen_lng', models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True, verbose_name='Last Seen Longitude')),
                ('image', models.ImageField(blank=True, null=True, upload_to=cases.models.case_image_upload_to, verbose_name='Photo')),
                ('additional_info', models.TextField(blank=True, default='', verbose_name='Additional Information')),
                ('reported_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='reported_cases',
                    to=settings.AUTH_USER_MODEL,
                    verbose_name='Reported By',
                )),
            ],
            options={
                'verbose_name': 'Case',
                'verbose_name_plural': 'Cases',
                'db_table': 'persons',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['updated_at', 'date'], name='persons_updated_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StatusHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('previous_status', models.CharField(max_length=50, verbose_name='Previous Status')),
                ('new_status', models.CharField(max_length=50, verbose_name='New Status')),
                ('changed_at', models.DateTimeField(auto_now_add=True, verbose_name='Changed At')),
                ('changed_by', models.ForeignKey(
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='case_status_changes',
                    to=settings.AUTH_USER_MODEL,
                    verbose_name='Changed By',
                )),
                ('person', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='status_history',
                    to='cases.case',
                    verbose_name='Case',
                )),
            ],
            options={
                'verbose_name': 'Status History',
                'verbose_name_plural': 'Status History',
                'db_table': 'status_history',
                'ordering': ['-changed_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Tip',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('content', models.TextField(verbose_name='Content')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('person', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='tips',
                    to='cases.case',
                    verbose_name='Case',
                )),
                ('submitted_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='tips',
                    to=settings.AUTH_USER_MODEL,
                    verbose_name='Submitted By',
                )),
            ],
            options={
                'verbose_name': 'Tip',
                'verbose_name_plural': 'Tips',
                'db_table': 'tips',
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
