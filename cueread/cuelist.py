# -*- coding: utf-8 -*-
#
# This file is part of `cueread`, a library for the cue list notation
#
# Copyright © 2026 by the cueread authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
The top level containers: the :class:`CueList` and the :class:`Document`.

The cue list holds the keyframes in the order they were read. At most one
keyframe at the end of the list is open; new channel writes go to the last
open keyframe, see :meth:`CueList.last_open`.

"""

from .node import Node
from .elements import ChannelData


class CueList(Node):
    """The ordered list of top level keyframes."""

    __slots__ = ()

    def last_open(self):
        """Return the last keyframe that is not closed, or None."""
        for kf in reversed(self):
            if not kf.is_closed():
                return kf

    def close_last(self):
        """Finish the last open keyframe and return it.

        Returns None if there is no open keyframe.

        """
        kf = self.last_open()
        if kf is not None:
            kf.finish()
        return kf

    def channel_count(self):
        """Return the total number of channel writes in all keyframes."""
        return sum(1 for n in self // ChannelData)

    def write(self):
        """Return the cue list notation of all keyframes."""
        return ''.join(kf.write() for kf in self)

    def dump_text(self):
        """Return the readable summary of all keyframes, one line each.

        Every keyframe line is followed by the lines of its channel writes::

            KeyFrame lasts for 10 ms. childs: 1
            Ch 1: 30

        """
        lines = []
        for kf in self:
            lines.append("{} childs: {}".format(kf, len(kf)))
            lines.extend(str(cd) for cd in kf / ChannelData)
        return '\n'.join(lines)


class Document:
    """A cue document, with a head and a body.

    Both are None until assigned.

    """
    def __init__(self, head=None, body=None):
        self.head = head
        self.body = body

    def __repr__(self):
        return "<{} head={!r} body={!r}>".format(type(self).__name__, self.head, self.body)

    def equals(self, other):
        """Return True if the head and the body of both documents are equivalent."""
        def eq(a, b):
            return a is b is None or (a is not None and a.equals(b))
        return type(other) is type(self) and \
            eq(self.head, other.head) and eq(self.body, other.body)

    def write(self):
        """Return the cue list notation of this document."""
        text = "X!"
        if self.head is not None:
            text += self.head.write()
        if self.body is not None:
            text += self.body.write()
        return text
