# apps/stores/apps.py

from django.apps import AppConfig


class StoresConfig(AppConfig):
    """Vendor stores, upgrade requests and cashouts"""
    
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.stores'
    verbose_name = 'Stores'
