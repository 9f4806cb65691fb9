"""Bundled data files for reclaim."""
