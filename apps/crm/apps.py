from django.apps import AppConfig

class CrmConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.crm'
    label = 'crm'

    def ready(self):
        import apps.crm.handlers  # task-board outbox handlers
