"""authflow: email/password authentication service and session client."""

__version__ = "0.1.0"
