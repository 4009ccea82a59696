"""
Index naming convention check.

Dated indices should be named with dots (``logs-2024.01.01``) rather than
dashes (``logs-2024-01-01``). The match is a substring search, so any
dash date anywhere in the name is reported.
"""

from __future__ import annotations

import re
from typing import List

from index_auditor.app.checks.base import Base
from index_auditor.app.schemas.findings import (
    FindingObject as Finding,
    FindingCategory,
    FindingSource,
    Severity,
)

DASH_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


def dotted_index_name(index_name: str) -> str:
    """Rewrite every YYYY-MM-DD in the name as YYYY.MM.DD."""
    return DASH_DATE.sub(r"\1.\2.\3", index_name)


class IndexNameCheck(Base):
    """
    Warn about indices whose names carry a dash-delimited date.
    """

    name = "index_name"

    def check(self) -> List[Finding]:
        findings: List[Finding] = []

        for group_name, indices in self._index_list.items():
            for index in indices:
                if not DASH_DATE.search(index.name):
                    continue

                self.logger.warning(
                    "Prefer YYYY.MM.dd to YYYY-MM-dd for naming indices: %s",
                    index.name,
                )
                findings.append(
                    Finding(
                        finding_id="NAME-MIN-001",
                        source=FindingSource.INDEX_NAME,
                        category=FindingCategory.NAMING,
                        severity=Severity.MINOR,
                        title="Dash-delimited date in index name",
                        description=(
                            "Prefer YYYY.MM.dd to YYYY-MM-dd for naming "
                            f"indices: {index.name}"
                        ),
                        index_name=index.name,
                        suggested_fix=dotted_index_name(index.name),
                        metadata={"group": group_name},
                    )
                )

        return findings
