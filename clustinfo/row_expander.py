"""
Extend the PIDs, functions and taxa of each row of an annotation table
(e.g. UniRef) to include every element of the clusters it references.
"""

import logging
from typing import List, NamedTuple, Tuple
from clustinfo.exceptions import MalformedRowError
from clustinfo.helpers import InputFile, ProgressReporter, safe_open
from clustinfo.records import ClusterIndex

HEADER = "Cluster ID\tPIDS\tFunc\tTax\n"

# Columns of the annotation table
CLUSTER_REF_COL = 4
TAXON_COL = 9
N_FIELDS = 10

# Number of rows between progress reports
REPORTING_INTERVAL = 100000


class ExpandedRow(NamedTuple):
    cluster_id: str
    identifiers: List[str]
    functions: List[str]
    taxa: List[str]


def parse_list(value: str) -> List[str]:
    """Remove all whitespace and split on ';'."""
    return "".join(value.split()).split(";")


def expand_row(fields: List[str], index: ClusterIndex) -> Tuple[ExpandedRow, int]:
    """
    Union the identifiers, taxa and functions of every cluster referenced
    by a single row of the annotation table.

    Returns the expanded row along with the number of cluster references
    which could not be found in the index.
    """

    # The taxa listed for the row itself are always included
    all_tax = set(parse_list(fields[TAXON_COL]))
    all_pid = set()
    all_fnc = set()

    n_unresolved = 0
    for cluster_id in parse_list(fields[CLUSTER_REF_COL]):
        rec = index.get(cluster_id)
        if rec is None:
            # No cluster information
            if len(cluster_id) > 0:
                n_unresolved += 1
            continue

        all_pid.update(rec.identifiers)
        all_tax.update(rec.taxa)
        all_fnc.update(rec.functions)

    return ExpandedRow(
        fields[0],
        sorted(all_pid),
        sorted(all_fnc),
        sorted(all_tax)
    ), n_unresolved


def format_row(row: ExpandedRow) -> str:
    return "\t".join([
        row.cluster_id,
        ";".join(row.identifiers),
        "@".join(row.functions),
        ";".join(row.taxa)
    ]) + "\n"


def expand_table(annotation_fp, index: ClusterIndex, output_fp, truncate=0, skip_header=True) -> int:
    """
    Stream the annotation table, writing out the expanded version of each row.
    If `truncate` is positive, only that many rows are processed.

    Returns the number of rows written.
    """

    logger = logging.getLogger('clustinfo')
    logger.info(f"Scanning {annotation_fp}")

    n_rows = 0
    n_unresolved = 0

    with InputFile(annotation_fp) as handle, safe_open(output_fp, "wt") as out:

        out.write(HEADER)

        progress = ProgressReporter(handle, REPORTING_INTERVAL, "Scanning annotations")
        lines = enumerate(handle, start=1)

        # The first line of the table is its own header
        if skip_header:
            next(lines, None)

        for line_number, line in lines:

            if truncate > 0 and n_rows >= truncate:
                logger.info(f"Stopping after {truncate:,} rows")
                break

            fields = line.rstrip("\n").split("\t")
            if len(fields) < N_FIELDS:
                raise MalformedRowError(annotation_fp, line_number, len(fields), N_FIELDS)

            row, row_unresolved = expand_row(fields, index)
            out.write(format_row(row))

            n_rows += 1
            n_unresolved += row_unresolved
            progress.increment()

    logger.info(f"Wrote {n_rows:,} rows to {output_fp}")
    logger.info(f"Cluster references not found in the index: {n_unresolved:,}")
    return n_rows
