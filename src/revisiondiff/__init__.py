# -*- coding: utf-8 -*-
"""
    revisiondiff
    ~~~~~~~~~~~~

    Shows what changed between two revisions of a structured entity, field by
    field and line by line.  Examples:

    >>> import datetime
    >>> from revisiondiff import EntitySnapshot, FieldValue, render_revision_diff
    >>> when = datetime.datetime(2024, 5, 1, 9, 30)
    >>> old = EntitySnapshot('node/1', 1, when, 'ana', fields={
    ...     'body': FieldValue('text_long', ['<p>Hello</p><p>World</p>'])})
    >>> new = EntitySnapshot('node/1', 2, when, 'ana', is_current=True, fields={
    ...     'body': FieldValue('text_long', ['<p>Hello</p><p>Earth</p>'])})
    >>> table = render_revision_diff(old, new)
    >>> print(table.header[0].data.label)
    2024-05-01 09:30 by ana
    >>> for row in table.groups[0].diff_rows:
    ...     print(row.op.value, repr(row.left_text), repr(row.right_text))
    equal 'Hello' 'Hello'
    equal '' ''
    change 'World' 'Earth'

    >>> from revisiondiff import normalize
    >>> print(normalize('html_to_text', '<ul><li>One</li><li>Two</li></ul>'))
    * One
    * Two
"""
from .config import ComparisonConfig, Layout, Normalization
from .comparison import compare_entities
from .differ import compare_revision_ids, diff_fields, render_revision_diff, validate_selection
from .errors import InputError
from .layouts import assemble
from .line_differ import diff_lines
from .lines import split_lines
from .models import (
    ComparedField, DiffOp, EntitySnapshot, FieldDiffSettings, FieldValue,
    LineDiffRow, RevisionSelection, TableModel,
)
from .normalization import normalize
from .overview import build_overview
from .renderers import register_renderer
from .store import EntityStore, InMemoryEntityStore

__all__ = [
    'ComparisonConfig',
    'Layout',
    'Normalization',
    'compare_entities',
    'compare_revision_ids',
    'diff_fields',
    'render_revision_diff',
    'validate_selection',
    'InputError',
    'assemble',
    'diff_lines',
    'split_lines',
    'ComparedField',
    'DiffOp',
    'EntitySnapshot',
    'FieldDiffSettings',
    'FieldValue',
    'LineDiffRow',
    'RevisionSelection',
    'TableModel',
    'normalize',
    'build_overview',
    'register_renderer',
    'EntityStore',
    'InMemoryEntityStore',
]
