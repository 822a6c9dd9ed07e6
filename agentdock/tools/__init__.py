"""Tool catalog and gateway."""
