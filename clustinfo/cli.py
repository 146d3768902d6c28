import click
import zlib
from clustinfo.exceptions import ClustInfoError
from clustinfo.helpers import setup_logging
from clustinfo.index_builder import build_index, summarize_index
from clustinfo.index_loader import read_index
from clustinfo.row_expander import expand_table


def run_or_exit(logger, f, *args, **kwargs):
    """Any fatal error is logged and ends the process with a non-zero status."""

    try:
        return f(*args, **kwargs)
    except (ClustInfoError, OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        raise SystemExit(1)


@click.command
@click.option('--membership', type=click.Path(exists=True, dir_okay=False), required=True, help='Cluster membership table (.tsv.gz)')
@click.option('--output', type=click.Path(dir_okay=False), required=True, help='Path to write the cluster index (.json.gz)')
@click.option('--truncate', type=int, default=0, show_default=True, help='If positive, only read this many lines of the membership table')
@click.option('--summary', type=click.Path(dir_okay=False), default=None, help='Optional path to write the number of members per cluster (.csv)')
@click.option('--log_file', type=click.Path(dir_okay=False), default=None, help='Optional path to also write the logs to')
def prep_clustinfo(membership, output, truncate, summary, log_file):
    """Build the cluster index from the cluster membership table."""

    logger = setup_logging("prep_clustinfo", log_file)

    records = run_or_exit(logger, build_index, membership, output, truncate=truncate)

    n_identifiers = sum(len(rec.identifiers) for rec in records.values())
    logger.info(f"Indexed {n_identifiers:,} identifiers across {len(records):,} clusters")

    if summary is not None:
        logger.info(f"Writing cluster summary to {summary}")
        summary_df = summarize_index(records)
        run_or_exit(logger, summary_df.to_csv, summary, index=False)

    logger.info("Done")


@click.command
@click.option('--clustinfo', type=click.Path(exists=True, dir_okay=False), required=True, help='Cluster index written by prep_clustinfo (.json.gz)')
@click.option('--annotations', type=click.Path(exists=True, dir_okay=False), required=True, help='Annotation table, e.g. UniRef (.tab.gz)')
@click.option('--output', type=click.Path(dir_okay=False), required=True, help='Path to write the expanded table (.tsv.gz)')
@click.option('--clustinfo_truncate', type=int, default=0, show_default=True, help='If positive, only read this many records of the cluster index')
@click.option('--truncate', type=int, default=0, show_default=True, help='If positive, only process this many rows of the annotation table')
@click.option('--skip_header/--no_skip_header', default=True, show_default=True, help='Skip the first line of the annotation table')
@click.option('--log_file', type=click.Path(dir_okay=False), default=None, help='Optional path to also write the logs to')
def expand_clusters(clustinfo, annotations, output, clustinfo_truncate, truncate, skip_header, log_file):
    """Extend the PIDs, functions and taxa of each annotation to all members of its clusters."""

    logger = setup_logging("expand_clusters", log_file)

    index = run_or_exit(logger, read_index, clustinfo, truncate=clustinfo_truncate)

    run_or_exit(
        logger,
        expand_table,
        annotations,
        index,
        output,
        truncate=truncate,
        skip_header=skip_header
    )

    logger.info("Done")
