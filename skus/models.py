"""
Model registration for the skus app.
"""
from skus.infrastructure.models import Sku  # noqa: F401
