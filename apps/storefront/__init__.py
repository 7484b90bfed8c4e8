"""Laptop storefront API: catalog listing, filtering and detail views."""
