"""Persistence of calculated plans."""
