# -*- coding: utf-8 -*-
"""
Configuration and constants for revisiondiff.
"""
import logging
import re
from enum import Enum

from .models import FieldDiffSettings

log = logging.getLogger(__name__)

text_type = str

_line_break_re = re.compile(r'\r\n|\r|\n')
_blank_lines_re = re.compile(r'\n{3,}')
_token_split_re = re.compile(r'(\s+|[^\w\s]+)', re.U)

# Tags that end a line when html is flattened to text.
BLOCK_TAGS = frozenset(['address', 'article', 'aside', 'blockquote', 'dd', 'div',
                        'dl', 'dt', 'figcaption', 'figure', 'footer', 'h1', 'h2',
                        'h3', 'h4', 'h5', 'h6', 'header', 'hr', 'li', 'ol', 'p',
                        'pre', 'section', 'table', 'tr', 'ul'])
# Blocks followed by an empty line.
PARAGRAPH_TAGS = frozenset(['blockquote', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
                            'ol', 'p', 'pre', 'table', 'ul'])
# Elements whose whole content is dropped by the filters.
DANGEROUS_TAGS = frozenset(['script', 'style', 'iframe', 'object', 'embed',
                            'applet', 'noscript', 'template'])
DEFAULT_ALLOWED_TAGS = frozenset(['a', 'em', 'strong', 'cite', 'blockquote',
                                  'code', 'ul', 'ol', 'li', 'dl', 'dt', 'dd'])
DEFAULT_ALLOWED_ATTRS = frozenset(['href', 'title', 'name'])
URI_ATTRS = frozenset(['href', 'src', 'action', 'formaction', 'cite'])
UNSAFE_SCHEMES = ('javascript:', 'vbscript:', 'data:')

EMPTY_MESSAGE = u'No visible changes'

# Strategy names stored by older diff settings
_STRATEGY_ALIASES = {
    'drupal_html_to_text': 'html_to_text',
    'filter_xss': 'filter_tags',
    'filter_xss_all': 'filter_all_tags',
}


class Normalization(Enum):
    """Text transform applied to a field value before line diffing."""

    NONE = 'none'
    HTML_TO_TEXT = 'html_to_text'
    FILTER_TAGS = 'filter_tags'
    FILTER_ALL_TAGS = 'filter_all_tags'

    @classmethod
    def coerce(cls, value, default=None):
        """
        Turn a configuration value into a member.

        Falsy values map to `default`. Unknown strings log a warning and map
        to `NONE`, so a bad setting never blocks a diff.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return default
        value = text_type(value).strip().lower()
        if value in _STRATEGY_ALIASES:
            return cls(_STRATEGY_ALIASES[value])
        try:
            return cls(value)
        except ValueError:
            log.warning('unknown normalization strategy %r, using pass-through', value)
            return cls.NONE


class Layout(Enum):
    """Rendering variants sharing the same assemble contract."""

    SIDE_BY_SIDE = 'split_fields'
    SINGLE_COLUMN = 'unified_fields'
    MARKDOWN = 'markdown'


_AUTO_SUBMIT_VALUES = ('auto', 'linear', 'true', '1', 'yes')


def _lookup(mapping, path, default=None):
    node = mapping
    for key in path.split('.'):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


class ComparisonConfig(object):
    """
    Runtime configuration for a revision comparison.

    Plain object with class level defaults; pass keyword arguments to
    override them per instance.  Instances must be treated as read-only once
    a comparison starts.
    """

    # Default strategy for fields whose type has no override
    normalization = Normalization.HTML_TO_TEXT
    # Submit the selection form as soon as both radios are picked
    radio_auto_submit = False

    field_type_overrides = {}
    excluded_field_types = frozenset()
    excluded_fields = frozenset()
    # Fields listed here are shown first, in this order
    field_order = ()
    field_labels = {}
    # Unchanged lines kept around a change; None keeps them all
    context_lines_leading = None
    context_lines_trailing = None

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(type(self), key) or key.startswith('_'):
                raise TypeError('unknown configuration option %r' % key)
            setattr(self, key, value)
        self.normalization = Normalization.coerce(self.normalization, Normalization.NONE)
        self.field_type_overrides = dict(
            (field_type, Normalization.coerce(strategy))
            for field_type, strategy in dict(self.field_type_overrides).items()
        )
        self.excluded_field_types = frozenset(self.excluded_field_types)
        self.excluded_fields = frozenset(self.excluded_fields)
        self.field_order = tuple(self.field_order)
        self.field_labels = dict(self.field_labels)
        self._type_settings = {}

    @classmethod
    def from_settings(cls, settings):
        """
        Resolve a nested settings mapping (as returned by a configuration
        provider) into a config object.  Key paths are read once, here.
        """
        settings = settings or {}
        overrides = {}

        markdown = _lookup(settings, 'general_settings.markdown')
        if markdown:
            overrides['normalization'] = Normalization.coerce(markdown, Normalization.NONE)

        radio = _lookup(settings, 'general_settings.radio_behavior')
        if isinstance(radio, bool):
            overrides['radio_auto_submit'] = radio
        elif radio is not None:
            overrides['radio_auto_submit'] = text_type(radio).lower() in _AUTO_SUBMIT_VALUES

        for side in ('leading', 'trailing'):
            value = _lookup(settings, 'general_settings.context_lines_%s' % side)
            if value is not None:
                overrides['context_lines_%s' % side] = int(value)

        type_overrides = {}
        excluded_types = set()
        for field_type, options in (_lookup(settings, 'field_types') or {}).items():
            options = options or {}
            if options.get('markdown'):
                type_overrides[field_type] = Normalization.coerce(options['markdown'])
            if options.get('enabled', True) is False:
                excluded_types.add(field_type)

        labels = {}
        excluded_fields = set()
        for name, options in (_lookup(settings, 'fields') or {}).items():
            options = options or {}
            if options.get('label'):
                labels[name] = text_type(options['label'])
            if options.get('enabled', True) is False:
                excluded_fields.add(name)

        overrides.update(
            field_type_overrides=type_overrides,
            excluded_field_types=excluded_types,
            excluded_fields=excluded_fields,
            field_labels=labels,
            field_order=tuple(settings.get('field_order') or ()),
        )
        return cls(**overrides)

    def settings_for(self, field_name, field_type):
        """
        Settings for one field.  The type level part is computed once per
        field type and reused for the lifetime of this config.
        """
        base = self._type_settings.get(field_type)
        if base is None:
            base = FieldDiffSettings(
                include=field_type not in self.excluded_field_types,
                normalization=self.field_type_overrides.get(field_type),
            )
            self._type_settings[field_type] = base
        include = base.include and field_name not in self.excluded_fields
        return FieldDiffSettings(
            include=include,
            normalization=base.normalization,
            label=self.field_labels.get(field_name, u''),
        )
