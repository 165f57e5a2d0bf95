"""
Model registration for the access app.
"""
from access.infrastructure.models import InternalAuthKey  # noqa: F401
