"""Catalog, validation, rendering, dispatch and workflow services."""
