# -*- coding: utf-8 -*-
"""
Line splitting for normalized field text.
"""
from .config import _line_break_re


def split_lines(text):
    """
    Split text on any line break.  The empty string is one empty line, so
    an empty field still lines up against a filled one.
    """
    if not text:
        return [u'']
    return _line_break_re.split(text)


def line_counts(left_lines, right_lines):
    """Per-side line counts of a field."""
    return len(left_lines), len(right_lines)
