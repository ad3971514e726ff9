"""Folder tree builder — folders-only navigation tree for destination picking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from drive_pages.index.metadata import MetadataIndex

if TYPE_CHECKING:
    from drive_pages.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class FolderNode:
    """A folder in the navigation tree.

    Attributes:
        id: Drive folder ID (the drive ID for the root).
        pretty_name: Human-readable label.
        path: Resolved site path of the folder ("" for the root).
        children: Sub-folders in sibling order; always a list, possibly empty.
    """

    id: str
    pretty_name: str
    path: str = ""
    children: list[FolderNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape used by the destination picker."""
        return {
            "id": self.id,
            "prettyName": self.pretty_name,
            "path": self.path,
            "children": [child.to_dict() for child in self.children],
        }


class FolderTreeBuilder:
    """Derives the folders-only tree from the metadata index."""

    def __init__(self, index: MetadataIndex, root_id: str, root_name: str) -> None:
        self._index = index
        self._root_id = root_id
        self._root_name = root_name

    def get_folders(self) -> list[FolderNode]:
        """Build the folder tree.

        Loads the index on first use, which may require a Drive listing.

        Returns:
            A single-element list holding the root FolderNode.
        """
        self._index.ensure_loaded()
        root = FolderNode(id=self._root_id, pretty_name=self._root_name)
        root.children = self._folder_children(self._root_id)
        logger.info(
            "[get_folders] built folder tree; top_level_count:%d",
            len(root.children),
        )
        return [root]

    def _folder_children(self, folder_id: str) -> list[FolderNode]:
        return [
            FolderNode(
                id=node.id,
                pretty_name=node.name,
                path=node.url,
                children=self._folder_children(node.id),
            )
            for node in self._index.children(folder_id)
            if node.is_folder
        ]


def folder_tree_builder_from_config(index: MetadataIndex, config: AppConfig) -> FolderTreeBuilder:
    """Construct a FolderTreeBuilder from application configuration.

    Args:
        index: MetadataIndex the tree is derived from.
        config: Application configuration instance.

    Returns:
        Configured FolderTreeBuilder instance.
    """
    return FolderTreeBuilder(index=index, root_id=config.drive_id, root_name=config.root_name)
