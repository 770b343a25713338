# -*- coding: utf-8 -*-
"""
Layout assembly.

A layout turns compared fields and their line diffs into a `TableModel`: one
header with the two revisions, then one row group per changed field.  The
variants share `assemble` and differ only in how a diff row becomes cells.
"""
from .config import Layout, Normalization, EMPTY_MESSAGE
from .inline import word_segments
from .line_differ import has_changes
from .lines import split_lines
from .models import (
    Cell, DiffOp, LinkTarget, RevisionDescriptor, RowGroup, TableModel, TableRow
)
from .normalization import normalize

MARKER = 'diff-marker'
CONTEXT = 'diff-context'
DELETED = 'diff-deletedline'
ADDED = 'diff-addedline'
LINE_NUMBER = 'diff-line-number'
FIELD_NAME = 'field-name'

DATE_FORMAT = '%Y-%m-%d %H:%M'


def describe_revision(snapshot):
    """Header/overview descriptor of one revision."""
    label = u'%s by %s' % (snapshot.created.strftime(DATE_FORMAT), snapshot.author)
    if snapshot.is_current:
        link = LinkTarget('entity.canonical', (('entity', snapshot.entity_id),))
    else:
        link = LinkTarget('entity.revision', (('entity', snapshot.entity_id),
                                              ('revision', snapshot.revision_id)))
    return RevisionDescriptor(snapshot.revision_id, label, link, snapshot.is_current)


def build_header(left, right):
    return (
        Cell(describe_revision(left), colspan=2),
        Cell(describe_revision(right), colspan=2),
    )


def default_normalization(layout, config):
    # The markdown layout always flattens markup when nothing is configured.
    if layout is Layout.MARKDOWN:
        return Normalization.HTML_TO_TEXT
    return config.normalization


def prepare_field(layout, field, config):
    """Normalize both sides of a compared field and split them into lines."""
    strategy = field.settings.normalization or default_normalization(layout, config)
    left = normalize(strategy, field.left)
    right = normalize(strategy, field.right)
    return split_lines(left), split_lines(right)


def _split_row(row, with_segments):
    if row.op is DiffOp.EQUAL:
        cells = (Cell(u'', (MARKER,)), Cell(row.left_text, (CONTEXT,)),
                 Cell(u'', (MARKER,)), Cell(row.right_text, (CONTEXT,)))
    elif row.op is DiffOp.DELETE:
        cells = (Cell(u'-', (MARKER,)), Cell(row.left_text, (CONTEXT, DELETED)),
                 Cell(u'', colspan=2))
    elif row.op is DiffOp.INSERT:
        cells = (Cell(u'', colspan=2),
                 Cell(u'+', (MARKER,)), Cell(row.right_text, (CONTEXT, ADDED)))
    else:
        left_segments = right_segments = None
        if with_segments:
            left_segments, right_segments = word_segments(row.left_text, row.right_text)
        cells = (Cell(u'-', (MARKER,)),
                 Cell(row.left_text, (CONTEXT, DELETED), segments=left_segments),
                 Cell(u'+', (MARKER,)),
                 Cell(row.right_text, (CONTEXT, ADDED), segments=right_segments))
    return TableRow(cells, row.op)


def side_by_side_rows(diff_rows):
    return [_split_row(row, True) for row in diff_rows]


def markdown_rows(diff_rows):
    return [_split_row(row, False) for row in diff_rows]


def _number(value):
    return u'' if value is None else value


def single_column_rows(diff_rows):
    """One text column; a changed line shows as a removed then an added row."""
    rv = []
    for row in diff_rows:
        numbers = (Cell(_number(row.left_number), (LINE_NUMBER,)),
                   Cell(_number(row.right_number), (LINE_NUMBER,)))
        if row.op is DiffOp.EQUAL:
            rv.append(TableRow(numbers + (Cell(u'', (MARKER,)),
                                          Cell(row.left_text, (CONTEXT,))), row.op))
            continue
        if row.op in (DiffOp.DELETE, DiffOp.CHANGE):
            rv.append(TableRow((numbers[0], Cell(u'', (LINE_NUMBER,)),
                                Cell(u'-', (MARKER,)),
                                Cell(row.left_text, (CONTEXT, DELETED))), row.op))
        if row.op in (DiffOp.INSERT, DiffOp.CHANGE):
            rv.append(TableRow((Cell(u'', (LINE_NUMBER,)), numbers[1],
                                Cell(u'+', (MARKER,)),
                                Cell(row.right_text, (CONTEXT, ADDED))), row.op))
    return rv


_ROW_BUILDERS = {
    Layout.SIDE_BY_SIDE: side_by_side_rows,
    Layout.SINGLE_COLUMN: single_column_rows,
    Layout.MARKDOWN: markdown_rows,
}


def assemble(layout, header, compared_fields, diff_rows_per_field):
    """
    Build the table model.  Fields without a single changed line are left
    out, label row included; an unchanged entity gives an empty body.
    """
    layout = Layout(layout)
    build_rows = _ROW_BUILDERS[layout]
    groups = []
    for field, diff_rows in zip(compared_fields, diff_rows_per_field):
        if not has_changes(diff_rows):
            continue
        label_row = None
        if field.label:
            label_row = TableRow((Cell(field.label, (FIELD_NAME,), colspan=4),))
        groups.append(RowGroup(
            field_name=field.name,
            label_row=label_row,
            diff_rows=tuple(diff_rows),
            rows=tuple(build_rows(diff_rows)),
        ))
    return TableModel(
        header=tuple(header),
        groups=tuple(groups),
        layout=layout,
        empty_message=EMPTY_MESSAGE,
    )
