import logging
from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'Core (errors, shared helpers)'

    def ready(self):
        from django.db import connection
        logger.info('DB=%s', connection.vendor)
