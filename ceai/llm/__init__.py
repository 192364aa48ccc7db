"""Generative-text collaborator: provider client and prompt templates."""
