"""Data models for cluster configurations and allocation plans."""
