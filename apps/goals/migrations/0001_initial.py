from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('areas', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Goal',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('target_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('active', 'Aktivní'), ('completed', 'Splněno'), ('paused', 'Pozastaveno'), ('cancelled', 'Zrušeno')], default='active', max_length=20)),
                ('priority', models.CharField(choices=[('meaningful', 'Smysluplný'), ('nice-to-have', 'Bylo by fajn')], default='meaningful', max_length=20)),
                ('goal_type', models.CharField(choices=[('outcome', 'Výsledek'), ('process', 'Proces')], default='outcome', max_length=20)),
                ('progress_percentage', models.PositiveIntegerField(default=0, help_text='Progress in percent (0-100)')),
                ('progress_type', models.CharField(choices=[('percentage', 'Procenta'), ('count', 'Počet'), ('steps', 'Podle kroků')], default='percentage', max_length=20)),
                ('focus_status', models.CharField(blank=True, choices=[('active_focus', 'V hlavním fokusu'), ('deferred', 'Odloženo')], max_length=20, null=True)),
                ('focus_order', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('area', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='goals', to='areas.area')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='goals', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['focus_order', 'target_date', 'id'],
                'indexes': [models.Index(fields=['user', 'focus_status', 'focus_order'], name='goal_focus_rank_idx')],
            },
        ),
    ]
