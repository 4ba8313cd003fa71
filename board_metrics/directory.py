"""
Node directory: transport address to node name, rebuilt every refresh.
"""

import asyncio
from collections.abc import Callable

from .clients.kubernetes import NodeLister, NodeListingError
from .logging import get_logger

logger = get_logger("nodes")

NodeDirectory = dict[str, str]


async def build_directory(connect: Callable[[], NodeLister]) -> NodeDirectory | None:
    """
    List every node and map each of its addresses to the node name.

    Args:
        connect: Factory for the node lister, called once per build on a
            worker thread

    Returns:
        The address mapping, or None if the lister cannot be created or the
        listing fails
    """
    try:
        lister = await asyncio.to_thread(connect)
    except NodeListingError as e:
        logger.warning(f"New kubernetes client error: {e}")
        return None

    try:
        nodes = await lister.list_nodes()
    except NodeListingError as e:
        logger.warning(f"List kubernetes nodes error: {e}")
        return None

    directory: NodeDirectory = {}
    for node in nodes:
        for address in node.addresses:
            directory[address] = node.name

    logger.debug(f"Node directory has {len(directory)} addresses for {len(nodes)} nodes")
    return directory
