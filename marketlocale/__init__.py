"""Locale resolution and translation engine for the marketplace web app."""
