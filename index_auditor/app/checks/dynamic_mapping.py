"""
Dynamic mapping detection.

When a document introduces a string field that the index mapping does not
declare, the cluster maps it automatically as ``text`` with a ``keyword``
sub-field capped at 256 characters. Finding that exact shape in a mapping
means the field was never defined explicitly.

Detection is an exact structural match on the ``fields`` entry of a
mapping node. A node whose ``fields`` differs in any key or value (a
different ``ignore_above``, an extra sub-field) is treated as explicit.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from index_auditor.app.checks.base import Base
from index_auditor.app.schemas.findings import (
    FindingObject as Finding,
    FindingCategory,
    FindingSource,
    Severity,
)

DEFAULT_DYNAMIC_FIELDS = {
    "keyword": {"type": "keyword", "ignore_above": 256},
}


def dynamic_mappings(mapping: Any, key: Sequence[str] = ()) -> List[str]:
    """
    Return the dot-joined paths of every dynamically mapped node.

    Traversal is depth-first and pre-order. A matching node is terminal:
    nothing underneath it is reported. Non-dict values yield nothing.
    """
    if not isinstance(mapping, dict):
        return []

    if mapping.get("fields") == DEFAULT_DYNAMIC_FIELDS:
        return [".".join(key)]

    result: List[str] = []
    for k, v in mapping.items():
        result += dynamic_mappings(v, key=(*key, k))

    return result


class DynamicMappingCheck(Base):
    """
    Look for dynamic mappings in every index of the index list.
    """

    name = "dynamic_mapping"

    def check(self) -> List[Finding]:
        findings: List[Finding] = []

        for group_name, indices in self._index_list.items():
            for index in indices:
                offenses = dynamic_mappings(index.mapping)
                if not offenses:
                    continue

                self.logger.warning(
                    "%d dynamic mappings detected in index %s",
                    len(offenses),
                    index.name,
                )
                for path in offenses:
                    self.logger.info(
                        "\tField %s looks like a dynamic field to me", path
                    )
                    findings.append(
                        _dynamic_field_finding(group_name, index.name, path)
                    )

        return findings


def _dynamic_field_finding(group_name: str, index_name: str, path: str) -> Finding:
    return Finding(
        finding_id="MAP-MIN-001",
        source=FindingSource.DYNAMIC_MAPPING,
        category=FindingCategory.MAPPING,
        severity=Severity.MINOR,
        title="Dynamically mapped field",
        description=f"Field {path} looks like a dynamic field to me",
        index_name=index_name,
        location=path,
        suggested_fix=(
            f"Declare an explicit mapping for '{path}' in the index template."
        ),
        metadata={"group": group_name},
    )
