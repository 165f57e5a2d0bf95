"""
Skus module - product feature catalog.

This module handles:
- Sku entity (unique code and unique name)
- Sku repository (port) and Django ORM adapter
- Feature catalog service used when issuing licenses
"""
