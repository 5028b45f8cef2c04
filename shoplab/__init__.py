"""
Shoplab - storefront schema, sample data and analytical reports
"""

__version__ = "1.0.0"
