# -*- coding: utf-8 -*-
"""
Access to stored revisions.

The comparison code only reads through this interface; persistence belongs
to whatever store the caller plugs in.
"""
from abc import ABC, abstractmethod


class EntityStore(ABC):
    """Read interface of a versioned entity store."""

    @abstractmethod
    def revision_ids(self, entity_id):
        """Revision ids of an entity, oldest first."""

    @abstractmethod
    def load_revision(self, entity_id, revision_id):
        """The snapshot of one revision, or `None` if it does not exist."""


class InMemoryEntityStore(EntityStore):
    """Store backed by a dict, for tests and callers that already hold snapshots."""

    def __init__(self, snapshots=()):
        self._revisions = {}
        for snapshot in snapshots:
            self.add(snapshot)

    def add(self, snapshot):
        self._revisions.setdefault(snapshot.entity_id, {})[snapshot.revision_id] = snapshot

    def revision_ids(self, entity_id):
        return sorted(self._revisions.get(entity_id, ()))

    def load_revision(self, entity_id, revision_id):
        return self._revisions.get(entity_id, {}).get(revision_id)
