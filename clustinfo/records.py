import json
from typing import Dict, List


class ClusterRecord:
    """The identifiers, taxa and functions of every member of a single cluster."""

    fields = ["identifiers", "taxa", "functions"]

    def __init__(
        self,
        id: str,
        identifiers: List[str] = None,
        taxa: List[str] = None,
        functions: List[str] = None
    ):
        self.id = id
        self.identifiers = [] if identifiers is None else identifiers
        self.taxa = [] if taxa is None else taxa
        self.functions = [] if functions is None else functions

    def __eq__(self, other):
        if not isinstance(other, ClusterRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (
            f"ClusterRecord(id={self.id!r}, identifiers={self.identifiers!r}, "
            f"taxa={self.taxa!r}, functions={self.functions!r})"
        )

    def to_dict(self) -> dict:
        return dict(
            id=self.id,
            identifiers=self.identifiers,
            taxa=self.taxa,
            functions=self.functions
        )

    def to_json(self) -> str:
        """Encode the record as a single line of JSON."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, dat: dict) -> 'ClusterRecord':
        return cls(
            dat["id"],
            identifiers=dat["identifiers"],
            taxa=dat["taxa"],
            functions=dat["functions"]
        )


# Mapping of cluster ID to the record for that cluster
ClusterIndex = Dict[str, ClusterRecord]
