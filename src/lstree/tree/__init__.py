"""Tree construction for directory listings.

This module provides the walker that lists a directory hierarchy into a tree
of nodes, applying display filters and collecting statistics.
"""
