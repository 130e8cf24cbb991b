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
This module defines the :class:`Node` class, the list based tree type the
cue elements and the cue list are built on.

A Node is a Python :class:`list` of child nodes. Appending a node sets its
:attr:`~Node.parent`, which is kept as a weak reference, so a cue tree never
contains circular references.

"""

import weakref


DUMP_STYLES = {
    "ascii":   (" | ", "   ", " |-", " `-"),
    "round":   (" │ ", "   ", " ├╴", " ╰╴"),
}

DUMP_STYLE_DEFAULT = "round"


_NO_PARENT = lambda: None


class Node(list):
    """A tree node based on :class:`list`.

    Iterating over a node yields its children in insertion order. A node
    always evaluates to True, even if it has no children.

    Two query operators select nodes by class (or by a tuple of classes):

    * ``node / ChannelData`` iterates over the children that are
      ChannelData instances;
    * ``node // ChannelData`` iterates over all descendants that are
      ChannelData instances, in document order.

    """

    __slots__ = ('__weakref__', '_parent')

    def __init__(self, *children):
        self._parent = _NO_PARENT
        self.extend(children)

    def __repr__(self):
        c = "child" if len(self) == 1 else "children"
        return '<{} ({} {})>'.format(type(self).__name__, len(self), c)

    def __bool__(self):
        """Always True."""
        return True

    __hash__ = object.__hash__

    def __eq__(self, other):
        """Identity compare, use :meth:`equals` to compare contents."""
        return self is other

    def __ne__(self, other):
        return self is not other

    def __truediv__(self, cls):
        """Iterate over children that inherit the specified class(es)."""
        return (n for n in self if isinstance(n, cls))

    def __floordiv__(self, cls):
        """Iterate over descendants that inherit the specified class(es)."""
        return (n for n in self.descendants() if isinstance(n, cls))

    @property
    def parent(self):
        """The parent Node or None; uses a weak reference."""
        return self._parent()

    def append(self, node):
        """Append node to this node; the parent is set to this node."""
        node._parent = weakref.ref(self)
        list.append(self, node)

    def extend(self, nodes):
        """Append nodes to this node; the parent is set to this node."""
        for node in nodes:
            self.append(node)

    def equals(self, other):
        """Return True if we and other are equivalent.

        Both nodes must have the same type, the same number of children,
        :meth:`body_equals` must return True, and all children must be
        equivalent as well.

        """
        return type(self) is type(other) and len(self) == len(other) and \
            self.body_equals(other) and \
            all(a.equals(b) for a, b in zip(self, other))

    def body_equals(self, other):
        """Implement this to compare instance attributes in :meth:`equals`.

        The default implementation returns True.

        """
        return True

    def is_last(self):
        """Return True if this is the last node. Fails if no parent."""
        return self.parent[-1] is self

    def descendants(self):
        """Iterate over all the descendants of this node, in document order."""
        for n in self:
            yield n
            yield from n.descendants()

    def dump(self, file=None, style=None, depth=0):
        """Display a graphical representation of the node and its contents.

        The file object defaults to stdout, and the style to "round". You can
        choose any style that's in the ``DUMP_STYLES`` dictionary.

        """
        d = DUMP_STYLES[style or DUMP_STYLE_DEFAULT]
        prefix = []
        node = self
        i = 2
        for _ in range(depth):
            prefix.append(d[i + int(node.is_last())])
            node = node.parent
            i = 0
        print(''.join(reversed(prefix)) + repr(self), file=file)
        for n in self:
            n.dump(file, style, depth + 1)

