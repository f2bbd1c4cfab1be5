from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('areas', '0001_initial'),
        ('goals', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyStep',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('completed', models.BooleanField(default=False)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('is_important', models.BooleanField(default=False)),
                ('is_urgent', models.BooleanField(default=False)),
                ('estimated_time', models.PositiveIntegerField(default=30, help_text='Minutes')),
                ('xp_reward', models.PositiveIntegerField(default=1)),
                ('deadline', models.DateField(blank=True, null=True)),
                ('checklist', models.JSONField(blank=True, default=list)),
                ('require_checklist_complete', models.BooleanField(default=False)),
                ('frequency', models.CharField(blank=True, choices=[('daily', 'Denně'), ('weekly', 'Týdně'), ('monthly', 'Měsíčně')], max_length=10, null=True)),
                ('selected_days', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('area', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='steps', to='areas.area')),
                ('goal', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='steps', to='goals.goal')),
                ('source_template', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='instances', to='steps.dailystep')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_steps', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['date', '-is_important', '-is_urgent', 'id'],
                'indexes': [
                    models.Index(fields=['user', 'date'], name='step_user_date_idx'),
                    models.Index(fields=['user', 'title', 'date'], name='step_user_title_date_idx'),
                ],
            },
        ),
        migrations.AddConstraint(
            model_name='dailystep',
            constraint=models.UniqueConstraint(
                condition=models.Q(('source_template__isnull', False)),
                fields=('source_template', 'date'),
                name='unique_instance_per_template_day',
            ),
        ),
    ]
