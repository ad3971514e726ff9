"""Metadata index — mirrors the Drive hierarchy into addressable site paths."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from drive_pages.drive.listing import DriveLister, drive_lister_from_config
from drive_pages.drive.models import RESOURCE_FOLDER, DriveFile, is_supported, resource_type
from drive_pages.index.slugs import slugify
from drive_pages.index.snapshot import IndexSnapshotStore, snapshot_store_from_config

if TYPE_CHECKING:
    from drive_pages.config import AppConfig
    from drive_pages.drive.client import DriveClient

logger = logging.getLogger(__name__)


@dataclass
class ResourceNode:
    """A single addressable resource in the site tree.

    Attributes:
        id: Drive file ID.
        parent_id: ID of the containing folder; None only for the root.
        path: Ancestor-joined path excluding this node's slug ("" for the
            root and for its direct children).
        slug: Final path segment ("" for the root).
        resource_type: "folder", "document" or "text/html".
        sort_key: Case-folded name used to order siblings.
        name: Drive file name.
        modified_time: RFC 3339 modification time reported by Drive.
    """

    id: str
    parent_id: str | None
    path: str
    slug: str
    resource_type: str
    sort_key: str
    name: str = ""
    modified_time: str = ""

    @property
    def url(self) -> str:
        """Resolved path of this resource ("" for the root)."""
        if not self.slug:
            return self.path
        return f"{self.path}/{self.slug}"

    @property
    def is_folder(self) -> bool:
        return self.resource_type == RESOURCE_FOLDER


def sort_nodes(nodes: Iterable[ResourceNode]) -> list[ResourceNode]:
    """Order siblings: folders first when types differ, otherwise by sort key."""
    return sorted(nodes, key=lambda n: (not n.is_folder, n.sort_key, n.id))


class MetadataIndex:
    """In-memory id → ResourceNode index rooted at the site's top-level container."""

    def __init__(
        self,
        root_id: str,
        lister: DriveLister | None = None,
        snapshot_store: IndexSnapshotStore | None = None,
    ) -> None:
        """Initialise an empty index.

        Args:
            root_id: ID of the top-level folder or team drive.
            lister: Source used by refresh() to re-list the drive.
            snapshot_store: Optional persisted listing consulted before
                falling back to a full re-list.
        """
        self._root_id = root_id
        self._lister = lister
        self._snapshot_store = snapshot_store
        self._nodes: dict[str, ResourceNode] = {}
        self._children: dict[str, list[str]] = {}
        self._loaded = False
        self._reset()

    @classmethod
    def from_files(cls, root_id: str, files: Iterable[DriveFile]) -> MetadataIndex:
        """Build a loaded index directly from a listing."""
        index = cls(root_id)
        index.build(files)
        return index

    @property
    def root_id(self) -> str:
        return self._root_id

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get_meta(self, resource_id: str) -> ResourceNode | None:
        """Look up a resource by ID; an unknown ID returns None."""
        return self._nodes.get(resource_id)

    def children(self, resource_id: str) -> list[ResourceNode]:
        """Return the ordered children of a resource (empty for leaves and unknown IDs)."""
        return [self._nodes[cid] for cid in self._children.get(resource_id, [])]

    def nodes(self) -> list[ResourceNode]:
        """Return every indexed resource, root included."""
        return list(self._nodes.values())

    def build(self, files: Iterable[DriveFile]) -> None:
        """Replace the index contents with the given listing.

        Unsupported resource types, trashed files and resources whose parent
        chain never reaches the root are dropped. Sibling slugs that collide
        are suffixed with -2, -3, ... in sibling order.

        Args:
            files: Files and folders from a Drive listing.
        """
        by_parent: dict[str, list[ResourceNode]] = {}
        candidates = 0
        for f in files:
            kind = resource_type(f.mime_type)
            if kind is None or not is_supported(kind):
                continue
            if f.trashed or f.id == self._root_id or not f.parents:
                continue
            candidates += 1
            node = ResourceNode(
                id=f.id,
                parent_id=f.parents[0],
                path="",
                slug=slugify(f.name) or f.id,
                resource_type=kind,
                sort_key=f.name.casefold(),
                name=f.name,
                modified_time=f.modified_time,
            )
            by_parent.setdefault(f.parents[0], []).append(node)

        self._reset()
        pending = [self._root_id]
        while pending:
            parent = self._nodes[pending.pop()]
            siblings = sort_nodes(by_parent.get(parent.id, []))
            taken: set[str] = set()
            for node in siblings:
                node.slug = _unique_slug(node.slug, taken)
                node.path = parent.url
                self._nodes[node.id] = node
                if node.is_folder:
                    pending.append(node.id)
            self._children[parent.id] = [n.id for n in siblings]

        dropped = candidates - (len(self._nodes) - 1)
        if dropped:
            logger.info("[build] dropped resources outside the root; count:%d", dropped)
        self._loaded = True
        logger.info("[build] index built; resource_count:%d", len(self._nodes))

    def ensure_loaded(self) -> None:
        """Populate the index on first use from the snapshot, else from Drive."""
        if self._loaded:
            return
        if self._snapshot_store is not None:
            files = self._snapshot_store.load()
            if files is not None:
                self.build(files)
                return
        self.refresh()

    def refresh(self) -> list[DriveFile]:
        """Re-list the drive, rebuild the index and persist the snapshot.

        Returns:
            The files returned by the listing.

        Raises:
            RuntimeError: If the index was created without a lister.
        """
        if self._lister is None:
            raise RuntimeError("MetadataIndex has no lister to refresh from")
        files = self._lister.list_files()
        self.build(files)
        if self._snapshot_store is not None:
            self._snapshot_store.save(files)
        return files

    def relocate(self, resource_id: str, destination_id: str) -> ResourceNode | None:
        """Re-parent a resource after a remote move.

        The slug is kept unless a sibling at the destination already uses it,
        in which case it gets the next free ``-2``, ``-3``, ... suffix. Paths of
        the resource and all of its descendants are recomputed.

        Returns:
            The relocated node, or None if either ID is not indexed or the
            destination is the resource itself or one of its descendants.
        """
        node = self._nodes.get(resource_id)
        destination = self._nodes.get(destination_id)
        if node is None or destination is None:
            return None
        if self.is_within(destination_id, resource_id):
            logger.warning(
                "[relocate] destination is inside the resource; resource_id:%s;destination_id:%s",
                resource_id,
                destination_id,
            )
            return None

        if node.parent_id is not None:
            siblings = self._children.get(node.parent_id, [])
            if resource_id in siblings:
                siblings.remove(resource_id)

        taken = {s.slug for s in self.children(destination_id)}
        slug = _unique_slug(node.slug, taken)
        if slug != node.slug:
            logger.info(
                "[relocate] slug already used at destination; slug:%s;new_slug:%s;destination:%s",
                node.slug,
                slug,
                destination.url,
            )
            node.slug = slug

        node.parent_id = destination_id
        siblings = self.children(destination_id) + [node]
        self._children[destination_id] = [n.id for n in sort_nodes(siblings)]
        self._reassign_paths(node, destination.url)
        return node

    def remove(self, resource_id: str) -> None:
        """Drop a resource and its descendants (e.g. after trashing)."""
        node = self._nodes.get(resource_id)
        if node is None or resource_id == self._root_id:
            return
        if node.parent_id is not None:
            siblings = self._children.get(node.parent_id, [])
            if resource_id in siblings:
                siblings.remove(resource_id)

        pending = [resource_id]
        while pending:
            current = pending.pop()
            pending.extend(self._children.pop(current, []))
            self._nodes.pop(current, None)

    def is_within(self, resource_id: str, ancestor_id: str) -> bool:
        """Return True if ``resource_id`` is ``ancestor_id`` or lies beneath it."""
        current: str | None = resource_id
        seen: set[str] = set()
        while current is not None and current not in seen:
            if current == ancestor_id:
                return True
            seen.add(current)
            node = self._nodes.get(current)
            current = node.parent_id if node is not None else None
        return False

    def descendants(self, resource_id: str) -> list[ResourceNode]:
        """Return every node beneath a resource, depth first, excluding the resource."""
        found: list[ResourceNode] = []
        pending = list(reversed(self.children(resource_id)))
        while pending:
            node = pending.pop()
            found.append(node)
            pending.extend(reversed(self.children(node.id)))
        return found

    def _reassign_paths(self, node: ResourceNode, path: str) -> None:
        node.path = path
        for child in self.children(node.id):
            self._reassign_paths(child, node.url)

    def _reset(self) -> None:
        root = ResourceNode(
            id=self._root_id,
            parent_id=None,
            path="",
            slug="",
            resource_type=RESOURCE_FOLDER,
            sort_key="",
        )
        self._nodes = {self._root_id: root}
        self._children = {self._root_id: []}


def _unique_slug(slug: str, taken: set[str]) -> str:
    candidate = slug
    suffix = 2
    while candidate in taken:
        candidate = f"{slug}-{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate


def metadata_index_from_config(drive_client: DriveClient, config: AppConfig) -> MetadataIndex:
    """Construct a MetadataIndex wired to a Drive lister and blob snapshot.

    Args:
        drive_client: Authenticated DriveClient instance.
        config: Application configuration instance.

    Returns:
        Configured, not yet loaded, MetadataIndex instance.
    """
    return MetadataIndex(
        root_id=config.drive_id,
        lister=drive_lister_from_config(drive_client, config),
        snapshot_store=snapshot_store_from_config(config),
    )
