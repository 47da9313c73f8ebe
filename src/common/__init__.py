"""Shared models, configuration, errors and progress helpers."""
