# -*- coding: utf-8 -*-
"""
Entry points: compare two revisions of an entity and build the table.
"""
import logging

from .comparison import compare_entities
from .config import ComparisonConfig, Layout
from .errors import InputError
from .layouts import assemble, build_header, prepare_field
from .line_differ import diff_lines, trim_context
from .lines import line_counts
from .models import RevisionSelection

log = logging.getLogger(__name__)


def validate_selection(selection):
    """
    Check a user selection and return it with the older revision on the left.
    Raises `InputError` when a side is missing or both sides are the same.
    """
    left, right = selection.left, selection.right
    if left is None or right is None or left == right:
        raise InputError('select different revisions to compare', (left, right))
    if left > right:
        left, right = right, left
    return RevisionSelection(left, right)


def diff_fields(compared_fields, config=None, layout=Layout.SIDE_BY_SIDE):
    """Normalize, split and diff every compared field; one row list per field."""
    config = config or ComparisonConfig()
    layout = Layout(layout)
    rv = []
    for field in compared_fields:
        left_lines, right_lines = prepare_field(layout, field, config)
        rows = diff_lines(left_lines, right_lines)
        rows = trim_context(rows, config.context_lines_leading, config.context_lines_trailing)
        left_count, right_count = line_counts(left_lines, right_lines)
        log.debug('field %s: %d/%d lines, %d rows', field.name,
                  left_count, right_count, len(rows))
        rv.append(rows)
    return rv


def render_revision_diff(left, right, config=None, layout=Layout.SIDE_BY_SIDE):
    """Build the diff table of two loaded snapshots (left is the older one)."""
    config = config or ComparisonConfig()
    fields = compare_entities(left, right, config)
    return assemble(layout, build_header(left, right), fields,
                    diff_fields(fields, config, layout))


def compare_revision_ids(store, entity_id, selection, config=None, layout=Layout.SIDE_BY_SIDE):
    """
    Compare two revisions picked by id.  The selection is validated and both
    revisions are loaded before any comparison work starts.
    """
    selection = validate_selection(selection)
    snapshots = []
    for revision_id in (selection.left, selection.right):
        snapshot = store.load_revision(entity_id, revision_id)
        if snapshot is None:
            raise InputError('revision %s of %s does not exist' % (revision_id, entity_id),
                             (selection.left, selection.right))
        snapshots.append(snapshot)
    log.debug('comparing revisions %s and %s of %s', selection.left, selection.right, entity_id)
    return render_revision_diff(snapshots[0], snapshots[1], config, layout)
