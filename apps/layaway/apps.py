from django.apps import AppConfig


class LayawayConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.layaway'
