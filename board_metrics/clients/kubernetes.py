"""
Kubernetes node listing.

Uses the official kubernetes client. The client is synchronous, so the
list call is pushed to a worker thread to keep the event loop free.
"""

import asyncio
from dataclasses import dataclass, field

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from ..const import USER_AGENT


class NodeListingError(Exception):
    """Kubernetes client construction or node listing failure."""


@dataclass
class NodeInfo:
    """A node name and every address it reports."""

    name: str
    addresses: list[str] = field(default_factory=list)


class NodeLister:
    """Lists cluster nodes through the Kubernetes core API."""

    def __init__(self, apiserver: str = "", kubeconfig: str = ""):
        """
        Build an API client.

        With neither argument the in-cluster service account is used. A
        kubeconfig path loads that file; apiserver overrides the host.

        Raises:
            NodeListingError: If no usable configuration can be loaded
        """
        configuration = client.Configuration()

        try:
            if kubeconfig:
                config.load_kube_config(
                    config_file=kubeconfig, client_configuration=configuration
                )
            elif not apiserver:
                config.load_incluster_config(client_configuration=configuration)
        except (ConfigException, OSError) as e:
            raise NodeListingError(f"Cannot load Kubernetes configuration: {e}") from e

        if apiserver:
            configuration.host = apiserver

        api_client = client.ApiClient(configuration)
        api_client.user_agent = USER_AGENT
        self._api = client.CoreV1Api(api_client)

    def _list_nodes(self) -> list[NodeInfo]:
        try:
            nodes = self._api.list_node()
        except ApiException as e:
            raise NodeListingError(f"List nodes failed: {e.status} {e.reason}") from e
        except Exception as e:
            raise NodeListingError(f"List nodes failed: {e}") from e

        return [
            NodeInfo(
                name=node.metadata.name,
                addresses=[a.address for a in ((node.status and node.status.addresses) or [])],
            )
            for node in nodes.items or []
        ]

    async def list_nodes(self) -> list[NodeInfo]:
        """
        List every node with its addresses.

        Raises:
            NodeListingError: If the API call fails
        """
        return await asyncio.to_thread(self._list_nodes)
