"""
AuditReport schema.

Defines the report produced by the Auditor for one index list. The report
is an aggregation only: it carries every finding the executed checks
returned and a structural status derived from their presence.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, model_validator
from pydantic import ConfigDict

from index_auditor.app.schemas.findings import FindingObject as Finding


class AuditStatus(str, Enum):
    """
    Overall outcome of the audit process.
    """

    CLEAN = "clean"
    OFFENSES_DETECTED = "offenses_detected"


class AuditReport(BaseModel):
    """
    Result of running the enabled checks against one index list.
    """

    audit_id: str = Field(..., description="The global audit identifier")

    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC timestamp of report construction",
    )

    status: AuditStatus = Field(
        ...,
        description="CLEAN iff no check produced a finding",
    )

    groups_audited: int = Field(
        0,
        ge=0,
        description="Number of index groups in the audited index list",
    )

    indices_audited: int = Field(
        0,
        ge=0,
        description="Number of indices in the audited index list",
    )

    checks_executed: List[str] = Field(
        default_factory=list,
        description="Names of the checks that were executed, in order",
    )

    findings: List[Finding] = Field(
        default_factory=list,
        description="Findings from all executed checks, in emission order",
    )

    @model_validator(mode="after")
    def enforce_status_invariant(self):
        expected = (
            AuditStatus.OFFENSES_DETECTED
            if self.findings
            else AuditStatus.CLEAN
        )
        if self.status is not expected:
            raise ValueError(
                f"status must be '{expected.value}' when "
                f"{len(self.findings)} finding(s) are present"
            )
        return self

    model_config = ConfigDict(frozen=True)
