# -*- coding: utf-8 -*-
"""
Funciones de parsing HTML para revisiondiff.
"""
from genshi.input import ET
import html5lib


def _drop_comments(element):
    """
    Remove comment nodes (their tag is not a string) keeping the text that
    follows them; genshi's ET adapter only understands real elements.
    """
    previous = None
    for child in list(element):
        if isinstance(child.tag, str):
            _drop_comments(child)
            previous = child
            continue
        tail = child.tail or u''
        element.remove(child)
        if previous is None:
            element.text = (element.text or u'') + tail
        else:
            previous.tail = (previous.tail or u'') + tail


def parse_html(html, wrapper_element='div'):
    """Parse an HTML fragment into a Genshi stream wrapped in one element."""
    builder = html5lib.getTreeBuilder('etree')
    # Unnamespaced tags keep the filters and the serializer simple.
    parser = html5lib.HTMLParser(tree=builder, namespaceHTMLElements=False)
    tree = parser.parseFragment(html)
    tree.tag = wrapper_element
    _drop_comments(tree)
    return ET(tree)
