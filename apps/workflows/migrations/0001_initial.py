import datetime

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
            name='Workflow',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(max_length=50)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('trigger_time', models.TimeField(default=datetime.time(18, 0))),
                ('enabled', models.BooleanField(default=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='workflows', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['trigger_time', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Automation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('type', models.CharField(choices=[('goal', 'Cíl'), ('metric', 'Metrika'), ('habit', 'Návyk')], max_length=20)),
                ('target_id', models.PositiveBigIntegerField()),
                ('frequency_type', models.CharField(choices=[('one-time', 'Jednorázově'), ('recurring', 'Opakovaně')], default='recurring', max_length=20)),
                ('frequency_time', models.TimeField(blank=True, null=True)),
                ('scheduled_date', models.DateField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('target_value', models.FloatField(blank=True, null=True)),
                ('current_value', models.FloatField(default=0)),
                ('update_value', models.FloatField(blank=True, null=True)),
                ('update_frequency', models.CharField(blank=True, choices=[('daily', 'Denně'), ('weekly', 'Týdně'), ('monthly', 'Měsíčně')], max_length=10, null=True)),
                ('update_day_of_week', models.PositiveSmallIntegerField(blank=True, help_text='0 = Monday', null=True)),
                ('update_day_of_month', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='automations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['created_at', 'id'],
            },
        ),
    ]
