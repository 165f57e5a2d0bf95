"""
Model registration for the keys app.
"""
from keys.infrastructure.models import KeyPair  # noqa: F401
