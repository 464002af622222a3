"""Semantic versions, constraint tokens and their evaluation."""
