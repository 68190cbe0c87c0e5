"""Concrete adapters for external services (Wikipedia, eBird) and caching."""
