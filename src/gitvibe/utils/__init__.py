"""Utility modules for gitvibe."""
