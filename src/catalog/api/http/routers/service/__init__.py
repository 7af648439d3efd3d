"""Service routers package."""
