# Generated manually: targeted alert feed.

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('cases', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Alert',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
                ('type', models.CharField(db_index=True, max_length=30, verbose_name='Alert Type')),
                ('message', models.TextField(verbose_name='Message')),
                ('role_target', models.CharField(blank=True, max_length=20, null=True, verbose_name='Role Target')),
                ('seen', models.BooleanField(default=False, verbose_name='Seen')),
                ('related_person', models.ForeignKey(
                    blank=True,
                    help_text='Nullified when the case is deleted; the message keeps the case id.',
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='alerts',
                    to='cases.case',
                    verbose_name='Related Case',
                )),
                ('user_target_id', models.PositiveBigIntegerField(blank=True, help_text='User PK; not a foreign key, so an unknown id never matches.', null=True, verbose_name='User Target')),
            ],
            options={
                'verbose_name': 'Alert',
                'verbose_name_plural': 'Alerts',
                'db_table': 'alerts',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['role_target', 'seen'], name='alerts_role_seen_idx'),
                    models.Index(fields=['user_target_id', 'seen'], name='alerts_user_seen_idx'),
                ],
            },
        ),
    ]
