"""Unit tests for clustinfo.index_loader."""

import json

import pytest

from clustinfo import index_builder, index_loader
from clustinfo.exceptions import CorruptIndexError
from clustinfo.records import ClusterRecord

from conftest import write_gz


@pytest.fixture
def records():
    return {
        "C1": ClusterRecord("C1", ["P1", "P2"], ["Escherichia", "Shigella"], ["kinase", "transferase"]),
        "C2": ClusterRecord("C2", ["P3"], ["Bacillus"], ["hydrolase"]),
        "C3": ClusterRecord("C3", ["P4"], [""], [""]),
    }


def test_round_trip(tmp_path, records):
    fp = tmp_path / "clusterinfo.json.gz"
    index_builder.write_index(records, fp)

    assert index_loader.read_index(fp) == records


def test_build_then_read(tmp_path, membership_fp):
    fp = tmp_path / "clusterinfo.json.gz"
    records = index_builder.build_index(membership_fp, fp)

    index = index_loader.read_index(fp)
    assert index == records
    assert index["C2"].identifiers == ["P3"]


def test_read_index_truncate(tmp_path, records):
    fp = tmp_path / "clusterinfo.json.gz"
    index_builder.write_index(records, fp)

    index = index_loader.read_index(fp, truncate=2)
    assert sorted(index) == ["C1", "C2"]


def test_read_empty_index(tmp_path):
    fp = write_gz(tmp_path / "empty.json.gz", [])
    assert index_loader.read_index(fp) == dict()


def test_read_legacy_index(tmp_path):
    """Indices written as `<cluster ID>\\t<JSON>` with Pid/Tax/Fnc keys are accepted."""
    fp = write_gz(
        tmp_path / "legacy.json.gz",
        ["C1\t" + json.dumps(dict(Pid=["P1"], Tax=["T1"], Fnc=["F1", "F2"]))]
    )
    assert index_loader.read_index(fp) == {"C1": ClusterRecord("C1", ["P1"], ["T1"], ["F1", "F2"])}


@pytest.mark.parametrize(
    "line",
    [
        '{"id": "C1", "identifiers": ["P1"], "taxa": ["T1"]',
        '["C1"]',
        '{"identifiers": ["P1"], "taxa": ["T1"], "functions": ["F1"]}',
        '{"id": "C1", "identifiers": ["P1"], "taxa": ["T1"]}',
        '{"id": "C1", "identifiers": ["P1"], "taxa": [1], "functions": ["F1"]}',
        'not a record',
    ]
)
def test_read_corrupt_record(tmp_path, line):
    fp = write_gz(
        tmp_path / "corrupt.json.gz",
        [
            json.dumps(dict(id="C0", identifiers=["P0"], taxa=["T0"], functions=["F0"])),
            line,
        ]
    )
    with pytest.raises(CorruptIndexError) as excinfo:
        index_loader.read_index(fp)
    assert excinfo.value.record_number == 2


def test_read_duplicate_cluster(tmp_path):
    line = json.dumps(dict(id="C0", identifiers=["P0"], taxa=["T0"], functions=["F0"]))
    fp = write_gz(tmp_path / "dup.json.gz", [line, line])
    with pytest.raises(CorruptIndexError):
        index_loader.read_index(fp)


def test_read_truncated_stream(tmp_path):
    records = {
        f"C{i}": ClusterRecord(f"C{i}", [f"P{i}"], [f"T{i}"], [f"F{i}"])
        for i in range(1000)
    }
    fp = tmp_path / "clusterinfo.json.gz"
    index_builder.write_index(records, fp)

    data = fp.read_bytes()
    fp.write_bytes(data[:len(data) // 2])

    with pytest.raises(CorruptIndexError):
        index_loader.read_index(fp)


def flip_bytes(fp, n_bytes=60):
    """XOR a run of bytes in the middle of a file."""
    data = bytearray(fp.read_bytes())
    start = len(data) // 2
    for i in range(start, start + n_bytes):
        data[i] ^= 0xFF
    fp.write_bytes(bytes(data))


def test_read_corrupted_stream(tmp_path):
    records = {
        f"C{i}": ClusterRecord(f"C{i}", [f"P{i}"], [f"T{i}"], [f"F{i}"])
        for i in range(1000)
    }
    fp = tmp_path / "clusterinfo.json.gz"
    index_builder.write_index(records, fp)
    flip_bytes(fp)

    with pytest.raises(CorruptIndexError):
        index_loader.read_index(fp)


def test_read_invalid_utf8(tmp_path):
    fp = tmp_path / "clusterinfo.json"
    fp.write_bytes(b'{"id": "C1", "identifiers": ["\xff\xfe"], "taxa": [], "functions": []}\n')

    with pytest.raises(CorruptIndexError) as excinfo:
        index_loader.read_index(fp)
    assert excinfo.value.record_number == 1
