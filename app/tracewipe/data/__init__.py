"""Bundled data files for tracewipe."""
