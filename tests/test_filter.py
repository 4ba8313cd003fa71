"""
Tests for the metric family allow/deny list.
"""

import pytest

from board_metrics.filter import AllowDenyList, FilterError
from board_metrics.models.metric import filter_families
from board_metrics.collectors.node import NODE_FAMILIES


def test_empty_list_includes_everything() -> None:
    """Test that an empty filter exposes everything."""
    allow_deny = AllowDenyList()

    assert allow_deny.is_included("board_cluster_cpu_utilization")
    assert allow_deny.status() == "exposing all metrics"


def test_allow_list_with_glob() -> None:
    """Test allow list glob matching."""
    allow_deny = AllowDenyList(allow=["board_cluster_*"])

    assert allow_deny.is_included("board_cluster_cpu_utilization")
    assert allow_deny.is_excluded("board_node_cpu_utilization")


def test_deny_list_with_regex() -> None:
    """Test deny list regex matching."""
    allow_deny = AllowDenyList(deny=["board_node_(cpu|memory)_utilization"])

    assert allow_deny.is_excluded("board_node_cpu_utilization")
    assert allow_deny.is_excluded("board_node_memory_utilization")
    assert allow_deny.is_included("board_node_storage_utilization")


def test_regex_must_match_whole_name() -> None:
    """Test that patterns must match the whole name."""
    allow_deny = AllowDenyList(allow=["board_node"])

    assert allow_deny.is_excluded("board_node_cpu_utilization")


def test_allow_and_deny_together_rejected() -> None:
    """Test that allow and deny lists are mutually exclusive."""
    with pytest.raises(FilterError):
        AllowDenyList(allow=["a"], deny=["b"])


def test_invalid_regex_rejected() -> None:
    """Test that an invalid regex is rejected."""
    with pytest.raises(FilterError):
        AllowDenyList(deny=["board_(node"])


def test_filter_families_preserves_order() -> None:
    """Test that filtering keeps family order."""
    families = filter_families(
        NODE_FAMILIES, AllowDenyList(deny=["board_node_memory_utilization"]).is_included
    )

    assert [f.name for f in families] == [
        "board_node_cpu_utilization",
        "board_node_storage_utilization",
    ]


def test_leading_wildcard_glob_accepted() -> None:
    """Test that a glob starting with a wildcard is accepted."""
    allow_deny = AllowDenyList(allow=["*_cpu_utilization"])

    assert allow_deny.is_included("board_node_cpu_utilization")
    assert allow_deny.is_excluded("board_node_memory_utilization")
