"""Node id generation."""

from uuid import uuid4

from nodetree.core.config import settings


def generate_node_id() -> str:
    """
    Generate a fresh node id.

    Returns:
        A uuid4 hex string, prefixed with NODE_ID_PREFIX when configured
    """
    return f"{settings.NODE_ID_PREFIX}{uuid4().hex}"
