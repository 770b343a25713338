# -*- coding: utf-8 -*-
"""
Field renderers: turn a `FieldValue` into the display string that gets
normalized and diffed.

Renderers are plain functions registered by field type.  Types without a
renderer use the generic one, so new field types still show up in a diff.
"""
import datetime
from collections.abc import Mapping

from .config import text_type

_renderers = {}


def register_renderer(*field_types):
    """Decorator registering an item renderer for one or more field types."""
    def decorator(func):
        for field_type in field_types:
            _renderers[field_type] = func
        return func
    return decorator


def _get(item, key, default=None):
    if isinstance(item, Mapping):
        return item.get(key, default)
    return default


def _scalar(value):
    if value is None:
        return u''
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return text_type(value)


@register_renderer('string', 'string_long', 'text', 'text_long', 'email', 'uri')
def render_value(item):
    """Generic renderer: the ``value`` key of a mapping, or the item itself."""
    if isinstance(item, Mapping):
        return _scalar(item.get('value'))
    return _scalar(item)


@register_renderer('text_with_summary')
def render_text_with_summary(item):
    summary = _get(item, 'summary')
    value = render_value(item)
    if summary:
        return u'%s\n\n%s' % (summary, value)
    return value


@register_renderer('entity_reference', 'file')
def render_reference(item):
    if not isinstance(item, Mapping):
        return _scalar(item)
    label = item.get('label')
    if label is None:
        label = item.get('target_id')
    return _scalar(label)


@register_renderer('image')
def render_image(item):
    rv = render_reference(item)
    alt = _get(item, 'alt')
    if alt:
        rv = u'%s (%s)' % (rv, alt)
    return rv


@register_renderer('link')
def render_link(item):
    if not isinstance(item, Mapping):
        return _scalar(item)
    uri = _scalar(item.get('uri'))
    title = item.get('title')
    if title:
        return u'%s (%s)' % (title, uri)
    return uri


@register_renderer('integer', 'decimal', 'float', 'datetime', 'timestamp')
def render_scalar(item):
    return _scalar(item.get('value') if isinstance(item, Mapping) else item)


@register_renderer('boolean')
def render_boolean(item):
    value = item.get('value') if isinstance(item, Mapping) else item
    return u'On' if value else u'Off'


@register_renderer('list_string', 'list_integer', 'list_float')
def render_list_option(item):
    label = _get(item, 'label')
    if label is not None:
        return _scalar(label)
    return render_value(item)


def render_field(value):
    """Display string of a whole field, one line per item.  `None` is ''."""
    if value is None:
        return u''
    render = _renderers.get(value.field_type, render_value)
    return u'\n'.join(render(item) for item in value.items)
