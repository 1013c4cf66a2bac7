"""Utility modules for opencleaner."""
