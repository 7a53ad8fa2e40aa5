"""Tickets services package."""
