"""Bundled data files for opencleaner."""
