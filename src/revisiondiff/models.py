# -*- coding: utf-8 -*-
"""
Value objects shared by the comparison pipeline.

Everything here is immutable: snapshots are borrowed from the entity store,
the rest is built and thrown away within a single comparison.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class DiffOp(Enum):
    EQUAL = 'equal'
    INSERT = 'insert'
    DELETE = 'delete'
    CHANGE = 'change'


@dataclass(frozen=True)
class FieldValue:
    """Content of one field at one revision.

    ``items`` holds one entry per field item; an entry is either a scalar or a
    mapping of sub-values (``{"value": ..., "format": ...}``).
    """

    field_type: str
    items: Tuple[Any, ...] = ()
    label: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, 'items', tuple(self.items))


@dataclass(frozen=True)
class EntitySnapshot:
    """Read-only view of an entity at one revision."""

    entity_id: Any
    revision_id: int
    created: datetime.datetime
    author: str
    is_current: bool = False
    fields: Mapping[str, FieldValue] = field(default_factory=dict)
    log_message: str = ''

    def __post_init__(self):
        object.__setattr__(self, 'fields', MappingProxyType(dict(self.fields)))


@dataclass(frozen=True)
class FieldDiffSettings:
    include: bool = True
    normalization: Any = None
    label: str = ''


@dataclass(frozen=True)
class ComparedField:
    """One field of the entity, rendered for both revisions."""

    name: str
    label: str
    settings: FieldDiffSettings
    left: str
    right: str


@dataclass(frozen=True)
class LineDiffRow:
    op: DiffOp
    left_number: Optional[int]
    right_number: Optional[int]
    left_text: Optional[str]
    right_text: Optional[str]


@dataclass(frozen=True)
class Segment:
    """Word level piece of a changed line."""

    op: DiffOp
    text: str


@dataclass(frozen=True)
class LinkTarget:
    route: str
    parameters: Tuple[Tuple[str, Any], ...] = ()


@dataclass(frozen=True)
class RevisionDescriptor:
    revision_id: int
    label: str
    link: LinkTarget
    is_current: bool = False


@dataclass(frozen=True)
class Cell:
    data: Any = ''
    classes: Tuple[str, ...] = ()
    colspan: int = 1
    segments: Optional[Tuple[Segment, ...]] = None


@dataclass(frozen=True)
class TableRow:
    cells: Tuple[Cell, ...]
    # None for field label rows
    op: Optional[DiffOp] = None


@dataclass(frozen=True)
class RowGroup:
    field_name: str
    label_row: Optional[TableRow]
    diff_rows: Tuple[LineDiffRow, ...]
    rows: Tuple[TableRow, ...]


@dataclass(frozen=True)
class TableModel:
    header: Tuple[Cell, ...]
    groups: Tuple[RowGroup, ...]
    layout: Any = None
    empty_message: str = ''

    @property
    def rows(self):
        """Body rows in display order, label rows included."""
        rv = []
        for group in self.groups:
            if group.label_row is not None:
                rv.append(group.label_row)
            rv.extend(group.rows)
        return tuple(rv)

    @property
    def is_empty(self):
        return not self.groups


@dataclass(frozen=True)
class RevisionSelection:
    left: Optional[int]
    right: Optional[int]


@dataclass(frozen=True)
class OperationDescriptor:
    name: str
    revision_id: int
    link: LinkTarget


@dataclass(frozen=True)
class OverviewRow:
    revision: RevisionDescriptor
    log_message: str = ''
    operations: Tuple[OperationDescriptor, ...] = ()


@dataclass(frozen=True)
class RevisionOverview:
    entity_id: Any
    rows: Tuple[OverviewRow, ...]
    default_selection: RevisionSelection
    radio_auto_submit: bool = False
