"""Tokenization, counting, lifecycle tracking and reporting."""
