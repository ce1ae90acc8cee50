"""Core configuration, logging and date/time helpers."""
