"""Collaborator interfaces."""
