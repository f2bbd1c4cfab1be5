from django.apps import AppConfig

class StepsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.steps'  # full dotted path
    label = 'steps'

    def ready(self):
        import apps.steps.signals
