"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- categories: Product categories
- variations: Variation sets and attributes
- products: Catalog products and duplicate checks

==============================================================================
"""

from . import health, categories, variations, products

__all__ = ["health", "categories", "variations", "products"]
