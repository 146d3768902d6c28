#!/usr/bin/env python3
"""Extend each row of an annotation table to include every member of the clusters it references."""

from clustinfo.cli import expand_clusters

if __name__ == "__main__":
    expand_clusters()
