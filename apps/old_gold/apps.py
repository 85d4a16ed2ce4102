from django.apps import AppConfig


class OldGoldConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.old_gold'
