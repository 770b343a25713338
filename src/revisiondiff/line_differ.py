# -*- coding: utf-8 -*-
"""
Line level diff engine.

Aligns two sequences of lines on their longest common subsequence and turns
the alignment into rows for a two sided table.  Lines are compared with
plain string equality.

    >>> from revisiondiff.line_differ import diff_lines
    >>> for row in diff_lines(['a', 'b', 'c'], ['a', 'x', 'c']):
    ...     print(row.op.value, row.left_number, row.right_number, row.left_text, row.right_text)
    equal 1 1 a a
    change 2 2 b x
    equal 3 3 c c
"""
from bisect import bisect_left

from .models import DiffOp, LineDiffRow
from .utils import longest_common_prefix_len, longest_common_suffix_len


def _lcs_pairs(a, b):
    """
    Matched index pairs of one longest common subsequence of `a` and `b`.

    The table holds LCS lengths of suffixes, so a forward walk can take the
    diagonal whenever two lines are equal.  On a tie the walk consumes the
    left side first, which puts deletions before insertions.
    """
    n, m = len(a), len(b)
    if not n or not m:
        return []
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row, below, line = table[i], table[i + 1], a[i]
        for j in range(m - 1, -1, -1):
            if line == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    pairs = []
    i = j = 0
    while i < n and j < m:
        if a[i] == b[j]:
            pairs.append((i, j))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs


def _emit_gap(rows, a, b, i1, i2, j1, j2):
    """
    Rows for the unmatched lines a[i1:i2] and b[j1:j2] found between two
    matches: paired changes first, then whatever is left over.
    """
    paired = min(i2 - i1, j2 - j1)
    for k in range(paired):
        rows.append(LineDiffRow(DiffOp.CHANGE, i1 + k + 1, j1 + k + 1, a[i1 + k], b[j1 + k]))
    for i in range(i1 + paired, i2):
        rows.append(LineDiffRow(DiffOp.DELETE, i + 1, None, a[i], None))
    for j in range(j1 + paired, j2):
        rows.append(LineDiffRow(DiffOp.INSERT, None, j + 1, None, b[j]))


def diff_lines(left_lines, right_lines):
    """
    Diff two line sequences into a list of `LineDiffRow`.

    Line numbers are 1-based; insert rows have no left side and delete rows
    no right side.  When the sequences share no line at all the result is
    every left line deleted followed by every right line inserted.
    """
    a = list(left_lines)
    b = list(right_lines)
    if not a and not b:
        return []

    prefix = longest_common_prefix_len(a, b)
    suffix = longest_common_suffix_len(a, b, prefix)
    a_end = len(a) - suffix
    b_end = len(b) - suffix

    matches = [(k, k) for k in range(prefix)]
    matches.extend((prefix + i, prefix + j)
                   for i, j in _lcs_pairs(a[prefix:a_end], b[prefix:b_end]))
    matches.extend((a_end + k, b_end + k) for k in range(suffix))

    rows = []
    if not matches:
        _emit_gap(rows, a, [], 0, len(a), 0, 0)
        _emit_gap(rows, [], b, 0, 0, 0, len(b))
        return rows

    i = j = 0
    for mi, mj in matches:
        _emit_gap(rows, a, b, i, mi, j, mj)
        rows.append(LineDiffRow(DiffOp.EQUAL, mi + 1, mj + 1, a[mi], b[mj]))
        i, j = mi + 1, mj + 1
    _emit_gap(rows, a, b, i, len(a), j, len(b))
    return rows


def has_changes(rows):
    return any(row.op is not DiffOp.EQUAL for row in rows)


def reconstruct(rows, side):
    """Rebuild the 'left' or 'right' line sequence from diff rows."""
    if side == 'left':
        return [row.left_text for row in rows if row.op is not DiffOp.INSERT]
    if side == 'right':
        return [row.right_text for row in rows if row.op is not DiffOp.DELETE]
    raise ValueError('side must be "left" or "right", not %r' % (side,))


def trim_context(rows, leading=None, trailing=None):
    """
    Drop unchanged rows that are further than `leading` rows before a change
    and further than `trailing` rows after one.  `None` keeps every row on
    that side of a change.
    """
    rows = list(rows)
    if leading is None and trailing is None:
        return rows
    changed = [k for k, row in enumerate(rows) if row.op is not DiffOp.EQUAL]
    if not changed:
        return []
    rv = []
    for k, row in enumerate(rows):
        if row.op is not DiffOp.EQUAL:
            rv.append(row)
            continue
        pos = bisect_left(changed, k)
        if pos < len(changed) and (leading is None or changed[pos] - k <= leading):
            rv.append(row)
        elif pos > 0 and (trailing is None or k - changed[pos - 1] <= trailing):
            rv.append(row)
    return rv
