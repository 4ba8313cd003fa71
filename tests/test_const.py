"""
Tests for constants.
"""

from board_metrics import __version__
from board_metrics.const import APP_NAME, APP_VERSION, COLLECTOR_KINDS, DEFAULT_REFRESH_INTERVAL


def test_constants():
    """Test that constants are defined."""
    assert APP_NAME == "Board Metrics"
    assert APP_VERSION == __version__
    assert DEFAULT_REFRESH_INTERVAL == 15.0
    assert COLLECTOR_KINDS == ("clusterresource", "noderesource")
