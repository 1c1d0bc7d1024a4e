"""Shared helpers for the application."""
