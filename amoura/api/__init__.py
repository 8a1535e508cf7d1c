"""Amoura HTTP API."""
