"""
Serialized record schemas.

Defines the nested JSON forms a tree is persisted in: the generic node
record, and the gallery and menu item records stored in the JSON
columns of posts, pages and menus.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from nodetree.schemas.node import MediaType, MenuItemType, NodeKind, Payload


class NodeRecord(BaseModel):
    """Generic serialized node: ``{id, kind, label, payload?, children}``."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, description="Node id")
    kind: NodeKind = Field(..., description="Container or leaf")
    label: str = Field(default="", description="Display label")
    payload: Payload | None = Field(None, description="Adapter specific data")
    children: list[NodeRecord] = Field(default_factory=list, description="Child records")

    @model_validator(mode="after")
    def check_leaf_has_no_children(self) -> NodeRecord:
        """Leaves cannot hold children."""
        if self.kind is NodeKind.LEAF and self.children:
            raise ValueError(f"Leaf node {self.id!r} cannot have children")
        return self


class GalleryItemRecord(BaseModel):
    """
    Serialized gallery item.

    Represents either a folder (with children) or an image/video (leaf).
    Older rows call the label ``name``; both spellings are accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Unique identifier for the item")
    type: str = Field(..., description="Item type: 'folder', 'image' or 'video'")
    label: str = Field(
        default="",
        validation_alias=AliasChoices("label", "name"),
        description="Folder name or image caption",
    )
    url: str | None = Field(None, description="Media URL (images and videos only)")
    alt: str | None = Field(None, description="Alternative text")
    children: list[GalleryItemRecord] = Field(
        default_factory=list, description="Child items (folders only)"
    )

    @field_validator("type")
    @classmethod
    def validate_item_type(cls, v: str) -> str:
        """Ensure item type is valid."""
        allowed = ["folder", *(media_type.value for media_type in MediaType)]
        if v not in allowed:
            raise ValueError(f"Item type must be one of {allowed}")
        return v

    @model_validator(mode="after")
    def check_shape(self) -> GalleryItemRecord:
        """Folders hold children and no URL; media items hold a URL and no children."""
        if self.type == "folder":
            if self.url:
                raise ValueError(f"Folder {self.id!r} cannot have a url")
        else:
            if not self.url:
                raise ValueError(f"Media item {self.id!r} requires a url")
            if self.children:
                raise ValueError(f"Media item {self.id!r} cannot have children")
        return self


class MenuItemRecord(BaseModel):
    """
    Serialized menu item.

    Every item may have children whether or not it also links somewhere.
    ``order`` is written for display consumers; list order is authoritative.
    """

    id: str = Field(..., min_length=1, description="Unique identifier for the item")
    label: str = Field(..., description="Display label")
    url: str = Field(default="", description="Link URL")
    type: MenuItemType = Field(default=MenuItemType.CUSTOM, description="Linked entity type")
    target: Literal["_self", "_blank"] = Field(default="_self", description="Link target")
    icon: str | None = Field(None, description="Optional icon name")
    css_class: str | None = Field(None, description="Optional CSS class")
    order: int | None = Field(None, description="Position among siblings")
    children: list[MenuItemRecord] = Field(default_factory=list, description="Sub-items")
