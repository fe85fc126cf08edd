"""
ASGI config for the dashboard project.

The API is plain request/response, so the stock Django ASGI handler is
all that is needed.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "dashboard.settings")

application = get_asgi_application()
