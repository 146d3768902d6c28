import gzip
import json
import logging
import zlib
from clustinfo.exceptions import CorruptIndexError
from clustinfo.helpers import InputFile
from clustinfo.records import ClusterIndex, ClusterRecord

# Keys used by indices written as `<cluster ID>\t<JSON lists>`
LEGACY_KEYS = dict(identifiers="Pid", taxa="Tax", functions="Fnc")


def read_index(fp, truncate=0) -> ClusterIndex:
    """
    Read the cluster index written by index_builder into memory.
    If `truncate` is positive, only that many records are read.
    """

    logger = logging.getLogger('clustinfo')
    logger.info(f"Reading cluster information from {fp}")

    index = dict()

    with InputFile(fp) as handle:
        try:
            for record_number, line in enumerate(handle, start=1):

                if truncate > 0 and record_number > truncate:
                    logger.info(f"Stopping after {truncate:,} records")
                    break

                rec = parse_record(line.rstrip("\n"), fp, record_number)

                if rec.id in index:
                    raise CorruptIndexError(fp, record_number, f"duplicate cluster ID {rec.id}")
                index[rec.id] = rec

        except EOFError as e:
            raise CorruptIndexError(fp, len(index) + 1, f"truncated stream ({e})") from e
        except (zlib.error, gzip.BadGzipFile, UnicodeDecodeError) as e:
            raise CorruptIndexError(fp, len(index) + 1, f"could not decode stream ({e})") from e

    logger.info(f"Read information for {len(index):,} clusters")
    return index


def parse_record(line: str, fp, record_number: int) -> ClusterRecord:
    """Decode a single line of the index."""

    if line.startswith("{"):
        payload = line
        cluster_id = None
        keys = {field: field for field in ClusterRecord.fields}
    elif "\t" in line:
        cluster_id, payload = line.split("\t", 1)
        keys = LEGACY_KEYS
    else:
        raise CorruptIndexError(fp, record_number, "not a cluster record")

    try:
        dat = json.loads(payload)
    except json.JSONDecodeError as e:
        raise CorruptIndexError(fp, record_number, f"invalid JSON ({e})") from e

    if not isinstance(dat, dict):
        raise CorruptIndexError(fp, record_number, "expected a JSON object")

    if cluster_id is None:
        cluster_id = dat.get("id")
    if not isinstance(cluster_id, str):
        raise CorruptIndexError(fp, record_number, "missing cluster ID")

    validated = dict(id=cluster_id)
    for field, key in keys.items():
        values = dat.get(key)
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise CorruptIndexError(fp, record_number, f"'{key}' must be a list of strings")
        validated[field] = values

    return ClusterRecord.from_dict(validated)
