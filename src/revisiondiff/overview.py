# -*- coding: utf-8 -*-
"""
Revision overview: the list of revisions a user picks two from.
"""
import logging

from .config import ComparisonConfig
from .layouts import describe_revision
from .models import (
    LinkTarget, OperationDescriptor, OverviewRow, RevisionOverview, RevisionSelection
)

log = logging.getLogger(__name__)

OPERATIONS = ('revert', 'delete')


def _operation(name, snapshot):
    link = LinkTarget('entity.revision_%s' % name,
                      (('entity', snapshot.entity_id), ('revision', snapshot.revision_id)))
    return OperationDescriptor(name, snapshot.revision_id, link)


def build_overview(store, entity_id, config=None, operations=()):
    """
    List the revisions of an entity, newest first.

    `operations` names the actions the caller allows on past revisions
    (``'revert'``, ``'delete'``); the current revision never gets any.
    Revisions the store cannot load are skipped.
    """
    config = config or ComparisonConfig()
    allowed = [name for name in OPERATIONS if name in operations]
    snapshots = []
    for revision_id in reversed(list(store.revision_ids(entity_id))):
        snapshot = store.load_revision(entity_id, revision_id)
        if snapshot is None:
            log.warning('revision %s of %s is listed but cannot be loaded',
                        revision_id, entity_id)
            continue
        snapshots.append(snapshot)

    rows = []
    for snapshot in snapshots:
        ops = ()
        if not snapshot.is_current:
            ops = tuple(_operation(name, snapshot) for name in allowed)
        rows.append(OverviewRow(describe_revision(snapshot), snapshot.log_message, ops))

    return RevisionOverview(
        entity_id=entity_id,
        rows=tuple(rows),
        default_selection=default_selection(snapshots),
        radio_auto_submit=config.radio_auto_submit,
    )


def default_selection(snapshots):
    """
    Preselected pair for newest-first `snapshots`: the current revision on the
    right, the second newest revision on the left.
    """
    if not snapshots:
        return RevisionSelection(None, None)
    right = next((s.revision_id for s in snapshots if s.is_current),
                 snapshots[0].revision_id)
    left = snapshots[1].revision_id if len(snapshots) > 1 else None
    return RevisionSelection(left, right)
