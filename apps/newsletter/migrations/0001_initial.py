import apps.newsletter.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Subscriber',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('status', models.CharField(choices=[('pending', 'Čeká na potvrzení'), ('confirmed', 'Potvrzeno'), ('unsubscribed', 'Odhlášeno')], default='pending', max_length=20)),
                ('confirm_token', models.CharField(default=apps.newsletter.models.new_token, max_length=64, unique=True)),
                ('unsubscribe_token', models.CharField(default=apps.newsletter.models.new_token, max_length=64, unique=True)),
                ('source', models.CharField(blank=True, max_length=50)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Campaign',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('subject', models.CharField(max_length=255)),
                ('sender', models.CharField(blank=True, max_length=255)),
                ('description', models.TextField(blank=True)),
                ('sections', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('draft', 'Koncept'), ('scheduled', 'Naplánováno'), ('sent', 'Odesláno')], default='draft', max_length=20)),
                ('scheduled_at', models.DateTimeField(blank=True, null=True)),
                ('sent_at', models.DateTimeField(blank=True, null=True)),
                ('show_on_blog', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-scheduled_at', '-created_at'],
            },
        ),
    ]
