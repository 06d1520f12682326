"""
Pricing Catalog - product lookup over vendor pricing catalogs.
"""

__version__ = "1.0.0"
