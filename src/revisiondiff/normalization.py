# -*- coding: utf-8 -*-
"""
Field value normalization.

A normalization strategy turns the raw display string of a field (usually
HTML coming from a rich text field) into the text that is split into lines
and diffed.  All strategies are pure functions of their input.
"""
import logging

from genshi.core import Attrs, Stream, START, END, TEXT

from .config import (
    Normalization, text_type, BLOCK_TAGS, PARAGRAPH_TAGS, DANGEROUS_TAGS,
    DEFAULT_ALLOWED_TAGS, DEFAULT_ALLOWED_ATTRS, URI_ATTRS, UNSAFE_SCHEMES,
    _blank_lines_re,
)
from .parser import parse_html
from .utils import qname_localname, collapse_ws, inner_events

log = logging.getLogger(__name__)

HR_LINE = u'-' * 40
CELL_SEPARATOR = u' | '
EMPHASIS_MARKS = {'em': u'/', 'i': u'/', 'strong': u'*', 'b': u'*'}


def _safe_events(html):
    """
    Content events of an HTML fragment, with the whole subtree of dangerous
    elements (script, style, ...) removed.
    """
    skip = 0
    for kind, data, pos in inner_events(parse_html(html)):
        if skip:
            if kind == START:
                skip += 1
            elif kind == END:
                skip -= 1
            continue
        if kind == START and qname_localname(data[0]) in DANGEROUS_TAGS:
            skip = 1
            continue
        yield kind, data, pos


def _ensure_break(out):
    if out and not out[-1].endswith(u'\n'):
        out.append(u'\n')


def html_to_text(html):
    """
    Convert HTML to readable plain text: blocks become lines, paragraphs are
    separated by an empty line, list items get a ``* `` bullet or a ``1)``
    number, table cells are joined with ``|`` and emphasis is kept as
    ``/em/`` and ``*strong*``.  Link targets become numbered footnotes
    listed after the text, so a changed URL still shows in a diff.
    """
    out = []
    footnotes = []
    links = []
    # None for <ul>, item counter for <ol>
    lists = []
    # cells seen so far in each open <tr>
    rows = []
    pre_depth = 0
    for kind, data, _pos in _safe_events(html):
        if kind == START:
            tag, attrs = data
            name = qname_localname(tag)
            if name == 'br':
                out.append(u'\n')
            elif name == 'hr':
                _ensure_break(out)
                out.append(HR_LINE + u'\n')
            elif name in BLOCK_TAGS:
                _ensure_break(out)
            if name == 'li':
                if lists and lists[-1] is not None:
                    lists[-1] += 1
                    out.append(u'%d) ' % lists[-1])
                else:
                    out.append(u'* ')
            elif name in ('ul', 'ol'):
                lists.append(0 if name == 'ol' else None)
            elif name == 'tr':
                rows.append(0)
            elif name in ('td', 'th') and rows:
                if rows[-1]:
                    while out and not out[-1].strip(u' '):
                        out.pop()
                    if out:
                        out[-1] = out[-1].rstrip(u' ')
                    out.append(CELL_SEPARATOR)
                rows[-1] += 1
            elif name == 'a':
                links.append(attrs.get('href'))
            elif name in EMPHASIS_MARKS:
                out.append(EMPHASIS_MARKS[name])
            elif name == 'pre':
                pre_depth += 1
        elif kind == END:
            name = qname_localname(data)
            if name in ('ul', 'ol') and lists:
                lists.pop()
            elif name == 'tr' and rows:
                rows.pop()
            elif name == 'a' and links:
                href = links.pop()
                if href:
                    if href not in footnotes:
                        footnotes.append(href)
                    sep = u' ' if out and not out[-1].endswith((u' ', u'\n')) else u''
                    out.append(u'%s[%d]' % (sep, footnotes.index(href) + 1))
            elif name in EMPHASIS_MARKS:
                out.append(EMPHASIS_MARKS[name])
            elif name == 'pre':
                pre_depth -= 1
            if name in PARAGRAPH_TAGS:
                _ensure_break(out)
                out.append(u'\n')
            elif name in BLOCK_TAGS:
                _ensure_break(out)
        elif kind == TEXT and data:
            text = data if pre_depth else collapse_ws(data)
            if not pre_depth and (not out or out[-1].endswith((u' ', u'\n'))):
                text = text.lstrip(u' ')
            if text:
                out.append(text)
    lines = [line.rstrip() for line in u''.join(out).split(u'\n')]
    text = _blank_lines_re.sub(u'\n\n', u'\n'.join(lines)).strip(u'\n')
    if footnotes:
        notes = u'\n'.join(u'[%d] %s' % (index, href)
                           for index, href in enumerate(footnotes, 1))
        text = u'%s\n\n%s' % (text, notes) if text else notes
    return text


def _is_unsafe_uri(value):
    value = u''.join(ch for ch in text_type(value) if ch > u' ').lower()
    return value.startswith(UNSAFE_SCHEMES)


def _clean_attrs(attrs, allowed_attrs):
    rv = []
    for name, value in attrs:
        lname = qname_localname(name).lower()
        if lname.startswith('on') or lname not in allowed_attrs:
            continue
        if lname in URI_ATTRS and _is_unsafe_uri(value):
            continue
        rv.append((name, value))
    return Attrs(rv)


def filter_tags(html, allowed_tags=DEFAULT_ALLOWED_TAGS, allowed_attrs=DEFAULT_ALLOWED_ATTRS):
    """
    Keep only allow-listed tags and attributes.  Other tags are unwrapped,
    their text survives.  The result is serialized back to HTML.
    """
    events = []
    for kind, data, pos in _safe_events(html):
        if kind == START:
            tag, attrs = data
            if qname_localname(tag) in allowed_tags:
                events.append((kind, (tag, _clean_attrs(attrs, allowed_attrs)), pos))
        elif kind == END:
            if qname_localname(data) in allowed_tags:
                events.append((kind, data, pos))
        elif kind == TEXT:
            events.append((kind, data, pos))
    # Line structure must survive for the line splitter.
    rv = Stream(events).render('html', encoding=None, strip_whitespace=False)
    return rv.strip(u'\n')


def filter_all_tags(html):
    """Remove every tag; the text is kept HTML-escaped."""
    return filter_tags(html, allowed_tags=frozenset(), allowed_attrs=frozenset())


def passthrough(text):
    return text


_STRATEGIES = {
    Normalization.NONE: passthrough,
    Normalization.HTML_TO_TEXT: html_to_text,
    Normalization.FILTER_TAGS: filter_tags,
    Normalization.FILTER_ALL_TAGS: filter_all_tags,
}


def normalize(strategy, raw):
    """
    Apply a normalization strategy to a raw field value.

    `strategy` may be a `Normalization` member, its value, or empty.  An
    unknown strategy returns the input unchanged (after a logged warning).
    """
    if raw is None:
        text = u''
    elif isinstance(raw, text_type):
        text = raw
    else:
        text = text_type(raw)
    strategy = Normalization.coerce(strategy, Normalization.NONE)
    return _STRATEGIES[strategy](text)
