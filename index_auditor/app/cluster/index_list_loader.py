"""
Cluster index list loader.

Fetches index mappings from an OpenSearch cluster and arranges them into
the index list consumed by the checks. Indices are grouped by their name
with any trailing date removed, so daily indices of the same series land
in one group.

Error handling policy:
    Only opensearchpy.exceptions.OpenSearchException is caught, and it is
    re-raised as IndexListLoadError. Any other exception is a logic error
    in this code and propagates unchanged.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from opensearchpy import OpenSearch
from opensearchpy.exceptions import OpenSearchException

from index_auditor.app.config import AuditorConfig
from index_auditor.app.schemas.index_metadata import IndexList, IndexMetadata

logger = logging.getLogger(__name__)


# Trailing YYYY.MM.DD or YYYY-MM-DD, with an optional separator before it.
_TRAILING_DATE = re.compile(r"[-_.]?\d{4}[.\-]\d{2}[.\-]\d{2}$")


class IndexListLoadError(RuntimeError):
    """Raised when index metadata cannot be fetched from the cluster."""


def group_name_for(index_name: str) -> str:
    """
    Return the grouping name of an index.

    ``logs-2024.01.01`` -> ``logs``. Names without a trailing date, or
    consisting only of a date, group under themselves.
    """
    group = _TRAILING_DATE.sub("", index_name)
    return group or index_name


def build_client(config: AuditorConfig) -> OpenSearch:
    """
    Construct an OpenSearch client from runtime configuration.
    """
    http_auth = None
    if config.OPENSEARCH_USERNAME:
        http_auth = (config.OPENSEARCH_USERNAME, config.OPENSEARCH_PASSWORD)

    return OpenSearch(
        hosts=list(config.OPENSEARCH_HOSTS),
        http_auth=http_auth,
        verify_certs=config.OPENSEARCH_VERIFY_CERTS,
        timeout=config.OPENSEARCH_TIMEOUT_SECONDS,
    )


class ClusterIndexListLoader:
    """
    Builds an IndexList from the mappings of a live cluster.
    """

    def __init__(
        self,
        client: OpenSearch,
        include_hidden: bool = False,
    ) -> None:
        self._client = client
        self._include_hidden = include_hidden

    @classmethod
    def from_config(cls, config: AuditorConfig) -> "ClusterIndexListLoader":
        return cls(
            client=build_client(config),
            include_hidden=config.INCLUDE_HIDDEN_INDICES,
        )

    def load(self, pattern: str = "*") -> IndexList:
        try:
            response: Dict[str, Any] = self._client.indices.get_mapping(
                index=pattern
            )
        except OpenSearchException as exc:
            logger.error("Failed to fetch mappings for '%s': %s", pattern, exc)
            raise IndexListLoadError(
                f"Could not fetch index mappings for pattern '{pattern}': {exc}"
            ) from exc

        index_list: IndexList = {}

        for index_name in sorted(response):
            if index_name.startswith(".") and not self._include_hidden:
                logger.debug("Skipping hidden index %s", index_name)
                continue

            index = IndexMetadata(
                name=index_name,
                mapping=_mappings_of(response[index_name]),
            )
            index_list.setdefault(group_name_for(index_name), []).append(index)

        logger.info(
            "Loaded %d indices in %d groups for pattern '%s'",
            sum(len(v) for v in index_list.values()),
            len(index_list),
            pattern,
        )
        return index_list


def _mappings_of(entry: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not entry:
        return {}
    return entry.get("mappings") or {}
