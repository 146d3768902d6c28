#!/usr/bin/env python3
"""Build the cluster index (one JSON record per cluster) from the cluster membership table."""

from clustinfo.cli import prep_clustinfo

if __name__ == "__main__":
    prep_clustinfo()
