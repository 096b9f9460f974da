"""Shared utilities: errors, logging, ids, request context."""
