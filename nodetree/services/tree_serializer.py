"""
Tree serializer.

Converts trees to and from the nested JSON form stored in the JSON
columns of posts, pages, products and menus. The serializer owns the
recursion and the invariant checks; the record schema and the
node/record mapping are supplied by each adapter.
"""

import json
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from nodetree.core.config import settings
from nodetree.core.exceptions import InvalidSerializedFormError, TreeError
from nodetree.core.logging import get_logger
from nodetree.schemas.node import Node, NodeTree
from nodetree.schemas.records import NodeRecord
from nodetree.utils.validators import check_depth, find_duplicate_ids

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# encode(node, sibling_index, encoded_children) -> record
Encoder = Callable[[Node, int, list[RecordT]], RecordT]
# decode(record, decoded_children) -> node
Decoder = Callable[[RecordT, tuple[Node, ...]], Node]


def _encode_generic(node: Node, index: int, children: list[NodeRecord]) -> NodeRecord:
    return NodeRecord(
        id=node.id, kind=node.kind, label=node.label, payload=node.payload, children=children
    )


def _decode_generic(record: NodeRecord, children: tuple[Node, ...]) -> Node:
    return Node(
        id=record.id,
        kind=record.kind,
        label=record.label,
        payload=record.payload,
        children=children,
    )


class TreeSerializer(Generic[RecordT]):
    """
    Serializer between NodeTree snapshots and nested JSON records.

    Loading checks depth, record shape, id uniqueness and the leaf rule;
    any violation raises InvalidSerializedFormError.
    """

    def __init__(
        self,
        record_type: type[RecordT],
        encode: Encoder,
        decode: Decoder,
        max_depth: int | None = None,
    ) -> None:
        """
        Initialize serializer.

        Args:
            record_type: Pydantic schema of one serialized node
            encode: Maps a node (with encoded children) to a record
            decode: Maps a record (with decoded children) to a node
            max_depth: Deepest nesting accepted on load
        """
        self.record_type = record_type
        self.encode = encode
        self.decode = decode
        self.max_depth = max_depth or settings.MAX_TREE_DEPTH
        self._records = TypeAdapter(list[record_type])

    @classmethod
    def generic(cls, max_depth: int | None = None) -> "TreeSerializer[NodeRecord]":
        """Serializer for the generic ``{id, kind, label, payload?, children}`` form."""
        return cls(NodeRecord, _encode_generic, _decode_generic, max_depth=max_depth)

    def to_records(self, tree: NodeTree) -> list[dict[str, Any]]:
        """
        Serialize a tree to a list of plain JSON-ready dicts.

        Args:
            tree: Tree snapshot

        Returns:
            Top-level records in order
        """
        records = self._encode_all(tree.children)
        return [record.model_dump(mode="json", exclude_none=True) for record in records]

    def dumps(self, tree: NodeTree, indent: int | None = None) -> str:
        """Serialize a tree to a JSON string."""
        return json.dumps(self.to_records(tree), indent=indent)

    def from_records(self, data: Any) -> NodeTree:
        """
        Build a tree from raw records.

        Args:
            data: List of record dicts (parsed JSON)

        Returns:
            Tree snapshot with the same ids, order and payloads

        Raises:
            InvalidSerializedFormError: If the data is malformed or breaks
                a tree invariant
        """
        check_depth(data, self.max_depth)

        try:
            records = self._records.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Rejected serialized tree: {e.error_count()} validation error(s)")
            raise InvalidSerializedFormError(
                "record validation failed",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        try:
            children = self._decode_all(records)
        except ValidationError as e:
            raise InvalidSerializedFormError(
                "node validation failed",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e
        except InvalidSerializedFormError:
            raise
        except TreeError as e:
            raise InvalidSerializedFormError(e.message, details=e.details) from e

        duplicates = find_duplicate_ids(children)
        if duplicates:
            logger.warning(f"Rejected serialized tree with duplicate ids: {duplicates}")
            raise InvalidSerializedFormError(
                f"duplicate ids: {', '.join(duplicates)}", details={"duplicate_ids": duplicates}
            )

        return NodeTree(children=children)

    def loads(self, text: str | bytes) -> NodeTree:
        """
        Parse a tree from a JSON string.

        Raises:
            InvalidSerializedFormError: If the text is not valid JSON or
                not a valid tree
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise InvalidSerializedFormError(f"not valid JSON: {e}") from e
        return self.from_records(data)

    def _encode_all(self, nodes: tuple[Node, ...]) -> list[RecordT]:
        return [
            self.encode(node, index, self._encode_all(node.children))
            for index, node in enumerate(nodes)
        ]

    def _decode_all(self, records: list[RecordT]) -> tuple[Node, ...]:
        return tuple(
            self.decode(record, self._decode_all(getattr(record, "children", [])))
            for record in records
        )
