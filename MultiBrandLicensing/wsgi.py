"""
WSGI config for MultiBrandLicensing project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "MultiBrandLicensing.settings.dev")

application = get_wsgi_application()
