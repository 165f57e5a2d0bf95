"""
Access module - internal API keys and their roles.

This module handles:
- InternalAuthKey entity (only the sha256 of the raw key is stored)
- Repository (port) and Django ORM adapter
- Role resolution with an injected cache
"""
