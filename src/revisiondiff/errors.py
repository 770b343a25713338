# -*- coding: utf-8 -*-
"""
Exceptions raised by revisiondiff.
"""


class InputError(ValueError):
    """
    The selected revisions cannot be compared: they are equal, missing, or
    do not resolve in the entity store.  Raised before any comparison work.
    """

    def __init__(self, message, revision_ids=()):
        super().__init__(message)
        self.revision_ids = tuple(revision_ids)
