from django.apps import AppConfig

class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'  # full dotted path
    label = 'core'      # short label used in migrations

    def ready(self):
        import apps.core.notifications  # registers the e-mail handler
