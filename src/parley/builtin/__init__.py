"""Plugins registered by the framework itself."""
