"""
Index metadata schemas.

Defines the read-only input shared by every check: an ordered mapping from
a grouping name to the indices in that group. Each index carries its name
and its raw mapping tree exactly as returned by the cluster.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class IndexMetadata(BaseModel):
    """
    A single index and its field mapping.

    The mapping tree is kept verbatim. Nodes are dicts of string keys to
    nested dicts or leaf values; no further structure is assumed.
    """

    name: str = Field(..., min_length=1, description="Index name")

    mapping: Dict[str, Any] = Field(
        default_factory=dict,
        description="Raw mapping tree of the index",
    )

    model_config = ConfigDict(frozen=True)


# Grouping name -> indices in that group. Insertion order is preserved and
# determines check iteration order.
IndexList = Dict[str, List[IndexMetadata]]


class IndexListPayload(BaseModel):
    """
    HTTP request body carrying an index list.
    """

    indices: Dict[str, List[IndexMetadata]] = Field(
        default_factory=dict,
        description="Grouping name to indices in that group",
    )

    model_config = ConfigDict(extra="forbid")

    def index_count(self) -> int:
        return sum(len(group) for group in self.indices.values())
