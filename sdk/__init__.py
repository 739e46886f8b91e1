"""Python client for the product catalog API."""
