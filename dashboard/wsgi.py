# dashboard/wsgi.py
"""
WSGI config for the Project Monitoring Dashboard.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "dashboard.settings")

application = get_wsgi_application()
