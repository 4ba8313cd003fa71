"""
Label shaping and node identity helpers.

Externally sourced label names are made exposition-safe here, and
transport addresses (ip:port) found in the instance label are mapped to
human-readable node names.
"""

import re
from collections.abc import Mapping

from .models.metric import Metric

INSTANCE_LABEL = "instance"
NODENAME_LABEL = "nodename_for_board"

_INVALID_LABEL_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_label_name(name: str) -> str:
    """Replace every character outside [a-zA-Z0-9_] with an underscore."""
    return _INVALID_LABEL_CHARS.sub("_", name)


def prefix_label(name: str) -> str:
    """Exposition key for an arbitrary external label: label_<sanitized>."""
    return "label_" + sanitize_label_name(name)


def labels_to_metric_labels(labels: Mapping[str, str]) -> tuple[list[str], list[str]]:
    """
    Convert arbitrary key/value labels (Kubernetes object labels, for
    example) into prefixed label keys and their values.
    """
    keys = [prefix_label(k) for k in labels]
    values = [str(v) for v in labels.values()]
    return keys, values


def sample_to_metric(labels: Mapping[str, str], value: float) -> Metric:
    """Build a metric from a query sample, keeping its own label names."""
    return Metric(
        value=value,
        label_keys=[sanitize_label_name(k) for k in labels],
        label_values=[str(v) for v in labels.values()],
    )


def address_to_name(addr: str, directory: Mapping[str, str] | None) -> str:
    """
    Map an ip:port address to the name of the node owning the ip.

    Falls back to the address unchanged when there is no directory, no
    port in the address, or no node with that ip. A bare address without a
    port is returned as-is and never looked up, even when a node reports
    exactly that address.
    """
    if directory is None:
        return addr

    host, sep, _ = addr.partition(":")
    if not sep:
        return addr

    return directory.get(host, addr)


def add_node_names(
    metrics: list[Metric],
    directory: Mapping[str, str] | None,
) -> list[Metric]:
    """
    Append a nodename_for_board label to every metric carrying an instance.

    Existing labels keep their order. Without a directory the metrics are
    returned untouched.
    """
    if directory is None:
        return metrics

    for metric in metrics:
        labels = metric.labels
        if INSTANCE_LABEL in labels:
            metric.add_label(NODENAME_LABEL, address_to_name(labels[INSTANCE_LABEL], directory))

    return metrics
