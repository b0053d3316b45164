"""WSGI config for the rndclub project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rndclub.settings")

application = get_wsgi_application()
