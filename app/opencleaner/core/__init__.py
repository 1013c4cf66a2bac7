"""Core engine, safety, configuration and reporting for opencleaner."""
