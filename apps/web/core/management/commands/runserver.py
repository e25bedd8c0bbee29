"""
runserver that listens on settings.PORT when no address is given.
"""

from django.conf import settings
from django.contrib.staticfiles.management.commands.runserver import (
    Command as BaseRunserver,
)


class Command(BaseRunserver):
    default_port = str(settings.PORT)
