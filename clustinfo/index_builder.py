"""
Restructure the cluster membership table into one record per unique
cluster ID, holding the deduplicated identifiers, taxa and functions
of every member of that cluster.

Each line of the membership table is tab-delimited:
    <identifier> <cluster ID> <taxon> <function>@<function>@...

The index is written out as one JSON object per line, sorted by cluster ID.
"""

import logging
from typing import Dict, List
import pandas as pd
from clustinfo.exceptions import MalformedRowError
from clustinfo.helpers import InputFile, ProgressReporter, safe_open
from clustinfo.records import ClusterRecord

# Number of lines between progress reports
REPORTING_INTERVAL = 1000000

# Number of fields expected in each line of the membership table
N_FIELDS = 4


def read_membership(fp, truncate=0) -> Dict[str, ClusterRecord]:
    """
    Group the rows of the membership table by cluster ID.
    If `truncate` is positive, only that many lines are read.
    """

    logger = logging.getLogger('clustinfo')
    logger.info(f"Reading cluster membership from {fp}")

    records = dict()

    with InputFile(fp) as handle:

        progress = ProgressReporter(handle, REPORTING_INTERVAL, "Processing cluster information")

        for line_number, line in enumerate(handle, start=1):

            if truncate > 0 and line_number > truncate:
                logger.info(f"Stopping after {truncate:,} lines")
                break

            fields = line.rstrip("\n").split("\t")
            if len(fields) < N_FIELDS:
                raise MalformedRowError(fp, line_number, len(fields), N_FIELDS)

            identifier, cluster_id, taxon, functions = fields[:N_FIELDS]

            rec = records.get(cluster_id)
            if rec is None:
                # First time seeing this cluster
                rec = ClusterRecord(cluster_id)
                records[cluster_id] = rec

            rec.identifiers.append(identifier)
            rec.taxa.append(taxon)
            rec.functions.extend(functions.split("@"))

            progress.increment()

    logger.info(f"Read {progress.current:,} lines describing {len(records):,} clusters")
    return records


def unique(values: List[str]) -> List[str]:
    """Return the sorted, unique elements of a list of strings."""

    if len(values) <= 1:
        return values

    values = sorted(values)

    # Keep the first element of each run of identical values
    output = [values[0]]
    for v in values[1:]:
        if v != output[-1]:
            output.append(v)

    return output


def dedup_records(records: Dict[str, ClusterRecord]) -> Dict[str, ClusterRecord]:

    logging.getLogger('clustinfo').info("Sorting...")
    for rec in records.values():
        rec.identifiers = unique(rec.identifiers)
        rec.taxa = unique(rec.taxa)
        rec.functions = unique(rec.functions)

    return records


def write_index(records: Dict[str, ClusterRecord], fp):
    """Write out every record as a line of JSON, ordered by cluster ID."""

    logger = logging.getLogger('clustinfo')
    logger.info(f"Writing {len(records):,} clusters to {fp}")

    with safe_open(fp, "wt") as handle:
        for cluster_id in sorted(records):
            handle.write(records[cluster_id].to_json())
            handle.write("\n")


def summarize_index(records: Dict[str, ClusterRecord]) -> pd.DataFrame:
    """Count the number of identifiers, taxa and functions in each cluster."""

    return pd.DataFrame(
        [
            dict(
                cluster_id=cluster_id,
                n_identifiers=len(rec.identifiers),
                n_taxa=len(rec.taxa),
                n_functions=len(rec.functions)
            )
            for cluster_id, rec in sorted(records.items())
        ],
        columns=["cluster_id", "n_identifiers", "n_taxa", "n_functions"]
    )


def build_index(membership_fp, output_fp, truncate=0) -> Dict[str, ClusterRecord]:
    """Read the membership table, deduplicate each cluster, and write the index."""

    records = dedup_records(
        read_membership(membership_fp, truncate=truncate)
    )
    write_index(records, output_fp)
    return records
