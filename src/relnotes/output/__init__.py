"""Publish result reporters."""
