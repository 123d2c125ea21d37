"""shopcheck: end-to-end checks for a demo storefront and a public users API."""

__version__ = "0.1.0"
