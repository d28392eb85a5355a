"""Test doubles for the Sheets backend."""
