"""
Licenses module - signed license tokens and their records.

This module handles:
- Feature grants carried in the token's features claim
- Token claims, RS256 signing and verification
- Issuance (sku check, signing, self-verification, persistence)
- License record repository (port) and Django ORM adapter
"""
