"""Concrete collaborator adapters."""
