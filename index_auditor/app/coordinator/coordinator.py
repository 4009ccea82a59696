"""
Central audit coordinator.

IMPORTANT:
The coordinator is a DUMB AUTHORITY.

It MUST NOT:
- inspect index mappings or names
- interpret findings

Its sole responsibilities are:
- selecting the enabled checks
- enforcing execution order
- aggregating results
- constructing the final AuditReport
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Type

import anyio.to_thread

from index_auditor.app.config import AuditorConfig
from index_auditor.app.checks.base import Base
from index_auditor.app.checks.dynamic_mapping import DynamicMappingCheck
from index_auditor.app.checks.index_name import IndexNameCheck
from index_auditor.app.cluster.index_list_loader import ClusterIndexListLoader
from index_auditor.app.schemas.audit_report import AuditReport, AuditStatus
from index_auditor.app.schemas.findings import FindingObject as Finding
from index_auditor.app.schemas.index_metadata import IndexList

# Events (observational only)
from index_auditor.app.events import (
    AuditEvent,
    AuditEventType,
    AuditEventEmitter,
    NullEventEmitter,
)

logger = logging.getLogger(__name__)


def enabled_checks(config: AuditorConfig) -> List[Type[Base]]:
    """
    Return the check classes enabled by configuration, in execution order.
    """
    checks: List[Type[Base]] = []
    if config.ENABLE_DYNAMIC_MAPPING_CHECK:
        checks.append(DynamicMappingCheck)
    if config.ENABLE_INDEX_NAME_CHECK:
        checks.append(IndexNameCheck)
    return checks


class AuditorCoordinator:
    """
    Central audit coordinator.

    Execution order:
        1. Index list acquisition (cluster audits only)
        2. Dynamic mapping check
        3. Index name check
    """

    def __init__(
        self,
        config: AuditorConfig,
        checks: Optional[Sequence[Type[Base]]] = None,
        index_list_loader: Optional[ClusterIndexListLoader] = None,
        check_logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Direct constructor.

        Intended for tests and explicit wiring. No cluster client is
        constructed implicitly.
        """
        self._config = config
        self._checks = (
            list(checks) if checks is not None else enabled_checks(config)
        )
        self._index_list_loader = index_list_loader
        self._check_logger = check_logger

    # ------------------------------------------------------------------
    # Integration constructor (composition root)
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: AuditorConfig) -> "AuditorCoordinator":
        """
        Construct a fully wired AuditorCoordinator from runtime configuration.
        """
        return cls(
            config=config,
            checks=enabled_checks(config),
            index_list_loader=ClusterIndexListLoader.from_config(config),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run_cluster_audit(
        self,
        *,
        audit_id: str,
        emitter: Optional[AuditEventEmitter] = None,
    ) -> AuditReport:
        """
        Fetch the index list from the configured cluster, then audit it.
        """
        if self._index_list_loader is None:
            raise RuntimeError(
                "Cluster audit requested but no index list loader is configured"
            )

        emitter = emitter or NullEventEmitter()

        try:
            # The cluster client is synchronous; keep the event loop free
            index_list = await anyio.to_thread.run_sync(
                self._index_list_loader.load,
                self._config.INDEX_PATTERN,
            )
        except Exception as exc:
            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.AUDIT_FAILED,
                    details={
                        "error": str(exc),
                        "exception_type": type(exc).__name__,
                    },
                )
            )
            raise

        await emitter.emit(
            AuditEvent(
                audit_id=audit_id,
                event_type=AuditEventType.INDEX_LIST_LOADED,
                details={
                    "pattern": self._config.INDEX_PATTERN,
                    "groups_count": len(index_list),
                    "indices_count": _index_count(index_list),
                },
            )
        )

        return await self.run_audit(
            index_list=index_list,
            audit_id=audit_id,
            emitter=emitter,
        )

    async def run_audit(
        self,
        *,
        index_list: IndexList,
        audit_id: str,
        emitter: Optional[AuditEventEmitter] = None,
    ) -> AuditReport:
        """
        Run every enabled check against the index list.

        The emitter is strictly observational:
        - failures must not affect execution
        - events must not influence control flow
        """
        emitter = emitter or NullEventEmitter()

        await emitter.emit(
            AuditEvent(
                audit_id=audit_id,
                event_type=AuditEventType.AUDIT_STARTED,
                details={"checks": [c.name for c in self._checks]},
            )
        )

        try:
            all_findings: List[Finding] = []
            checks_executed: List[str] = []

            for check_cls in self._checks:
                await emitter.emit(
                    AuditEvent(
                        audit_id=audit_id,
                        event_type=AuditEventType.CHECK_STARTED,
                        details={"check": check_cls.name},
                    )
                )

                check = check_cls(index_list, logger=self._check_logger)
                findings = check.check()

                checks_executed.append(check_cls.name)
                all_findings.extend(findings)
                logger.debug(
                    "Check %s produced %d finding(s) for audit %s",
                    check_cls.name,
                    len(findings),
                    audit_id,
                )

                await emitter.emit(
                    AuditEvent(
                        audit_id=audit_id,
                        event_type=AuditEventType.CHECK_COMPLETED,
                        details={
                            "check": check_cls.name,
                            "findings_count": len(findings),
                        },
                    )
                )

            report = AuditReport(
                audit_id=audit_id,
                status=(
                    AuditStatus.OFFENSES_DETECTED
                    if all_findings
                    else AuditStatus.CLEAN
                ),
                groups_audited=len(index_list),
                indices_audited=_index_count(index_list),
                checks_executed=checks_executed,
                findings=all_findings,
            )

            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.AUDIT_COMPLETED,
                    details={
                        "status": report.status.value,
                        "report": report.model_dump(mode="json"),
                    },
                )
            )

            return report

        except Exception as exc:
            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.AUDIT_FAILED,
                    details={
                        "error": str(exc),
                        "exception_type": type(exc).__name__,
                    },
                )
            )
            raise


def _index_count(index_list: IndexList) -> int:
    return sum(len(indices) for indices in index_list.values())
