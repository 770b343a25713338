# -*- coding: utf-8 -*-
"""
Funciones utilitarias para revisiondiff.
"""
import re

from genshi.core import START, END

from .config import text_type

_ws_re = re.compile(r'\s+', re.U)


def qname_localname(qname):
    """
    QName in genshi renders like 'tag' or '{ns}tag'. Normalize to localname.
    Always coerce to text so comparisons against plain strings stay stable.
    """
    s = text_type(qname)
    if '}' in s:
        left, right = s.split('}', 1)
        if left.startswith('{') or '://' in left or left.startswith('http'):
            return right
    return s


def collapse_ws(s):
    """Colapsa espacios en blanco múltiples en un solo espacio."""
    return _ws_re.sub(u' ', s)


def inner_events(events):
    """
    Drop the artificial wrapper element added by `parse_html`, keeping the
    events of its content.
    """
    events = list(events)
    if len(events) >= 2 and events[0][0] == START and events[-1][0] == END:
        return events[1:-1]
    return events


def longest_common_prefix_len(a, b):
    """Calcula la longitud del prefijo común más largo."""
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


def longest_common_suffix_len(a, b, max_prefix=0):
    """Calcula la longitud del sufijo común más largo evitando solapamiento con el prefijo."""
    max_len = min(len(a) - max_prefix, len(b) - max_prefix)
    i = 0
    while i < max_len and a[-1 - i] == b[-1 - i]:
        i += 1
    return i
