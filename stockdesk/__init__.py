"""stockdesk - inventory and order-management admin API."""

__version__ = "1.0.0"
