"""Building blocks for admin web back ends: request context, JSON responses, claims, captcha store, connection settings and utilities."""

__version__ = "0.1.0"