"""HTTP surface of the group booking service."""
