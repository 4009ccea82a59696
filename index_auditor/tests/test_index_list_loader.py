"""
Tests for the cluster index list loader.

The cluster is replaced with a MagicMock client in every test; no network
access is required.
"""

from unittest.mock import MagicMock, patch

import pytest
from opensearchpy.exceptions import OpenSearchException

from index_auditor.app.config import AuditorConfig
from index_auditor.app.cluster.index_list_loader import (
    ClusterIndexListLoader,
    IndexListLoadError,
    build_client,
    group_name_for,
)
from index_auditor.tests.fixtures.index_factory import cluster_mapping_response


def _client(response=None, side_effect=None) -> MagicMock:
    client = MagicMock()
    if side_effect is not None:
        client.indices.get_mapping.side_effect = side_effect
    else:
        client.indices.get_mapping.return_value = response
    return client


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "index_name, group",
    [
        ("logs-2024.01.01", "logs"),
        ("logs-2024-01-01", "logs"),
        ("logs_2024.01.01", "logs"),
        ("logs2024.01.01", "logs"),
        ("logs-2024.01.01-000001", "logs-2024.01.01-000001"),
        ("customers", "customers"),
        ("2024.01.01", "2024.01.01"),
    ],
)
def test_group_name_strips_trailing_date(index_name, group):
    assert group_name_for(index_name) == group


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def test_load_groups_indices_and_skips_hidden():
    client = _client(cluster_mapping_response())

    index_list = ClusterIndexListLoader(client).load("*")

    client.indices.get_mapping.assert_called_once_with(index="*")
    assert list(index_list) == ["customers", "logs"]
    assert [i.name for i in index_list["logs"]] == [
        "logs-2024.01.01",
        "logs-2024.01.02",
    ]
    assert "properties" in index_list["logs"][1].mapping
    assert all(
        not i.name.startswith(".")
        for indices in index_list.values()
        for i in indices
    )


def test_load_includes_hidden_indices_when_asked():
    client = _client(cluster_mapping_response())

    index_list = ClusterIndexListLoader(client, include_hidden=True).load()

    assert [i.name for i in index_list[".kibana_1"]] == [".kibana_1"]


def test_load_tolerates_missing_mappings_entry():
    client = _client({"empty": {}, "bare": {"mappings": {}}})

    index_list = ClusterIndexListLoader(client).load("e*")

    assert index_list["empty"][0].mapping == {}
    assert index_list["bare"][0].mapping == {}


def test_transport_error_is_wrapped():
    client = _client(side_effect=OpenSearchException("cluster unavailable"))

    with pytest.raises(IndexListLoadError, match="cluster unavailable"):
        ClusterIndexListLoader(client).load("logs-*")


def test_logic_error_propagates_unwrapped():
    client = _client(side_effect=AttributeError("simulated logic error"))

    with pytest.raises(AttributeError, match="simulated logic error"):
        ClusterIndexListLoader(client).load()


# ---------------------------------------------------------------------------
# Client construction
# ---------------------------------------------------------------------------

def test_build_client_passes_connection_settings():
    config = AuditorConfig(
        OPENSEARCH_HOSTS=["https://node-1:9200", "https://node-2:9200"],
        OPENSEARCH_USERNAME="auditor",
        OPENSEARCH_PASSWORD="secret",
        OPENSEARCH_VERIFY_CERTS=False,
        OPENSEARCH_TIMEOUT_SECONDS=5,
    )

    with patch(
        "index_auditor.app.cluster.index_list_loader.OpenSearch"
    ) as opensearch:
        build_client(config)

    opensearch.assert_called_once_with(
        hosts=["https://node-1:9200", "https://node-2:9200"],
        http_auth=("auditor", "secret"),
        verify_certs=False,
        timeout=5,
    )


def test_build_client_without_credentials_disables_auth():
    with patch(
        "index_auditor.app.cluster.index_list_loader.OpenSearch"
    ) as opensearch:
        build_client(AuditorConfig())

    assert opensearch.call_args.kwargs["http_auth"] is None
