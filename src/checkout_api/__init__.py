"""FastAPI application exposing checkout and Stripe webhook endpoints."""
