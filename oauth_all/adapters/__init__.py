"""Adapters implementing core protocols with third-party libraries."""
