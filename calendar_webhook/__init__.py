"""Webhook service that appends scheduled appointments to a Google Sheet."""

__version__ = "0.1.0"
