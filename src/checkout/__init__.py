"""Stripe Checkout and webhook adapter."""

__version__ = "0.1.0"
