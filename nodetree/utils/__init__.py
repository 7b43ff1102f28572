"""Utilities package."""

from nodetree.utils.ids import generate_node_id
from nodetree.utils.validators import as_path, check_depth, find_duplicate_ids, is_prefix

__all__ = [
    "generate_node_id",
    "as_path",
    "check_depth",
    "find_duplicate_ids",
    "is_prefix",
]
