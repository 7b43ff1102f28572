"""
Breadcrumb schemas.

A breadcrumb trail is derived from a tree and a view path on every
render; it is never stored.
"""

from pydantic import BaseModel, ConfigDict, Field

from nodetree.schemas.node import Path


class BreadcrumbItem(BaseModel):
    """Schema for breadcrumb navigation item."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Node id")
    label: str = Field(..., description="Node label")
    path: Path = Field(..., description="Path to set as the view path when clicked")


class BreadcrumbTrail(BaseModel):
    """
    Schema for breadcrumb trail.

    When ``reset_to_root`` is set the requested path no longer resolves
    and the caller should reset its view path to the root.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[BreadcrumbItem, ...] = Field(
        default=(), description="Breadcrumb items from root to current"
    )
    root_label: str = Field(default="", description="Label of the root crumb")
    reset_to_root: bool = Field(
        default=False, description="The path is stale; reset the view path to root"
    )

    @property
    def pairs(self) -> list[tuple[str, str]]:
        """The trail as ``(id, label)`` pairs."""
        return [(item.id, item.label) for item in self.items]

    @property
    def current(self) -> BreadcrumbItem | None:
        return self.items[-1] if self.items else None
