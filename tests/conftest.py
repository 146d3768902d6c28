"""Helper functions for writing test data."""

import gzip
import logging

import pytest


def write_gz(fp, lines):
    with gzip.open(fp, "wt") as handle:
        for line in lines:
            handle.write(line + "\n")
    return fp


def read_gz(fp):
    with gzip.open(fp, "rt") as handle:
        return handle.read()


def annotation_line(cluster_id, cluster_refs, taxa):
    """Return a row of the annotation table with the references in column 4 and taxa in column 9."""
    fields = [cluster_id, "entry", "status", "protein name", cluster_refs, "gene", "organism", "length", "go", taxa]
    return "\t".join(fields)


ANNOTATION_HEADER = "\t".join([
    "Cluster ID", "Entry", "Status", "Protein names", "Cluster", "Gene names", "Organism", "Length", "GO", "Taxonomic lineage"
])


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop any handlers attached by the CLI so they do not outlive the test."""
    yield
    logger = logging.getLogger("clustinfo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def membership_fp(tmp_path):
    """
    Three clusters, where C1 has repeated identifiers, taxa and functions.
    """
    return write_gz(
        tmp_path / "clusterinfo.dat.gz",
        [
            "P1\tC1\tEscherichia\tkinase@transferase",
            "P2\tC1\tEscherichia\tkinase",
            "P1\tC1\tShigella\ttransferase@kinase",
            "P3\tC2\tBacillus\thydrolase",
            "P4\tC3\tVibrio\tporin@kinase",
        ]
    )


@pytest.fixture
def annotation_fp(tmp_path):
    return write_gz(
        tmp_path / "uniref.tab.gz",
        [
            ANNOTATION_HEADER,
            annotation_line("UniRef100_A", "C1", "Proteobacteria"),
            annotation_line("UniRef100_B", "C2; C3", "Firmicutes;Proteobacteria"),
            annotation_line("UniRef100_C", "C9", "Archaea"),
            annotation_line("UniRef100_D", "C1;C3;C7", "Proteobacteria"),
        ]
    )
