"""
Shared kernel: result type, domain exceptions, pagination, roles,
storage error translation, caching, metrics and middleware.
"""
