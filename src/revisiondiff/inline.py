# -*- coding: utf-8 -*-
"""
Word level diff of a changed line.

Used to highlight what changed inside a `change` row.  Text is split into
words, whitespace runs and punctuation runs, so "CAD" vs "CAD." shows as an
inserted "." instead of a replaced word.
"""
from difflib import SequenceMatcher

from .config import _token_split_re
from .models import DiffOp, Segment


class InsensitiveSequenceMatcher(SequenceMatcher):
    """
    SequenceMatcher that ignores very small matching blocks.

    This prevents "shredded" diffs where unrelated lines get word-by-word
    interleaving because they happen to share a space or a comma.
    """

    def __init__(self, isjunk=None, a='', b='', threshold=1):
        super().__init__(isjunk, a, b, autojunk=False)
        self.threshold = threshold

    def get_matching_blocks(self):
        # Short sequences keep every match, otherwise nothing would align.
        size = min(len(self.a), len(self.b))
        effective_threshold = min(self.threshold, size // 4)

        blocks = super().get_matching_blocks()
        # Keep blocks larger than threshold, or the sentinel (size=0) at the end.
        return [block for block in blocks
                if block[2] > effective_threshold or block[2] == 0]


def text_split(text):
    """Tokenize a line for word level diffing."""
    return [p for p in _token_split_re.split(text) if p != u'']


def _push(segments, op, tokens):
    text = u''.join(tokens)
    if not text:
        return
    if segments and segments[-1].op is op:
        segments[-1] = Segment(op, segments[-1].text + text)
    else:
        segments.append(Segment(op, text))


def word_segments(left, right, threshold=1):
    """
    Return ``(left_segments, right_segments)`` for two versions of a line.

    The left side is made of equal and deleted text, the right side of equal
    and inserted text; joining a side gives back its line.
    """
    old = text_split(left or u'')
    new = text_split(right or u'')
    matcher = InsensitiveSequenceMatcher(None, old, new, threshold=threshold)
    left_segments = []
    right_segments = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            _push(left_segments, DiffOp.EQUAL, old[i1:i2])
            _push(right_segments, DiffOp.EQUAL, new[j1:j2])
        else:
            _push(left_segments, DiffOp.DELETE, old[i1:i2])
            _push(right_segments, DiffOp.INSERT, new[j1:j2])
    return tuple(left_segments), tuple(right_segments)
