"""Rendering of walked trees as indented text."""
