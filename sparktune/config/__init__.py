"""Sizing constants, input bounds and settings file loading."""
