"""
Shared base for index metadata checks.

A check is constructed for one index list and run once. Its observable
contract is the log output it writes through the injected logger; the
findings it returns mirror those log lines for aggregation.

Checks are pure readers: they MUST NOT mutate the index list.
"""

from __future__ import annotations

import logging
from typing import ClassVar, List, Optional

from index_auditor.app.schemas.findings import FindingObject as Finding
from index_auditor.app.schemas.index_metadata import IndexList


class Base:
    """
    Base class for checks over an index list.

    Subclasses set ``name`` and implement ``check``.
    """

    name: ClassVar[str] = "base"

    def __init__(
        self,
        index_list: IndexList,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._index_list = index_list
        self.logger = logger or logging.getLogger(type(self).__module__)

    def check(self) -> List[Finding]:
        raise NotImplementedError
