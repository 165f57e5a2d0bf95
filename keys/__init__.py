"""
Keys module - signing key pair custody.

This module handles:
- PEM encoding/decoding of RSA key material
- KeyPair entity and domain logic
- Key vault repository (port) and Django ORM adapter
- Key service (generation, lookup, redaction, raw key bytes)
"""
