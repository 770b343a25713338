# -*- coding: utf-8 -*-
"""
Entity field comparison.

Walks two snapshots of the same entity and produces one `ComparedField` per
field that takes part in the diff, in display order.
"""
import logging

from .config import ComparisonConfig
from .errors import InputError
from .models import ComparedField
from .renderers import render_field

log = logging.getLogger(__name__)


def field_names(left, right, field_order=()):
    """
    Union of the field names of both snapshots.  Names listed in
    `field_order` come first, the rest keep their order of appearance
    (left snapshot first).
    """
    present = []
    seen = set()
    for name in list(left.fields) + list(right.fields):
        if name not in seen:
            seen.add(name)
            present.append(name)
    ordered = [name for name in field_order if name in seen]
    listed = set(ordered)
    ordered.extend(name for name in present if name not in listed)
    return ordered


def compare_entities(left, right, config=None):
    """
    Compare two revisions of an entity field by field.

    Fields whose settings exclude them are left out.  A field missing on one
    side compares as the empty string.  The snapshots are only read.
    """
    if left.revision_id == right.revision_id:
        raise InputError('select different revisions to compare',
                         (left.revision_id, right.revision_id))
    config = config or ComparisonConfig()
    rv = []
    for name in field_names(left, right, config.field_order):
        left_value = left.fields.get(name)
        right_value = right.fields.get(name)
        value = left_value if left_value is not None else right_value
        # A field with no value on either side still compares, as ''.
        field_type = value.field_type if value is not None else u''
        settings = config.settings_for(name, field_type)
        if not settings.include:
            log.debug('skipping excluded field %s (%s)', name, field_type)
            continue
        rv.append(ComparedField(
            name=name,
            label=settings.label,
            settings=settings,
            left=render_field(left_value),
            right=render_field(right_value),
        ))
    log.debug('compared %d fields between revisions %s and %s',
              len(rv), left.revision_id, right.revision_id)
    return rv
