from django.apps import AppConfig


class AdvanceBookingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.advance_booking'
