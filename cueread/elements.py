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
The cue elements.

Every element can receive parameters from the tokenizer: numbers via
:meth:`~Element.add_num_param` and strings via :meth:`~Element.add_str_param`.
What a parameter means depends on the element type and on the parameters the
element already received. Both methods never fail; an element that has no use
for a parameter silently ignores it.

A :class:`ComplexElement` can also have child elements, and is either open
(still receiving children) or closed. Calling :meth:`~ComplexElement.finish`
closes it.

The set of element types is fixed:

* :class:`ChannelData`, a single channel write,
* :class:`KeyFrame`, a timed step holding channel writes,
* :class:`Delay`, a wait for a beat signal or a number of milliseconds,
* :class:`ForIteration` and :class:`InfiniteIteration`, loops over nested
  cue fragments,
* :class:`PredefinedSchemaHead` and :class:`LinkedSchemaHead`, the document
  headers,
* :class:`Body`, the document body.

Every element can write itself back in the cue list notation using
:meth:`~Element.write`::

    >>> from cueread.elements import KeyFrame, ChannelData
    >>> kf = KeyFrame(10)
    >>> kf.append_child(ChannelData(1, 30))
    >>> kf.finish()
    >>> kf.write()
    'KF0H0A;BP0H01;0H1E;kf'

"""

__all__ = (
    'Element', 'ComplexElement', 'ChannelData', 'KeyFrame', 'Delay',
    'Iteration', 'ForIteration', 'InfiniteIteration', 'SchemaVersion',
    'Head', 'PredefinedSchemaHead', 'LinkedSchemaHead', 'Body',
)


import enum
import reprlib

from .node import Node


def write_number(value):
    """Return a numeric parameter literal for the value, e.g. ``0H1E;``."""
    return "0H{:02X};".format(int(value))


def write_string(text):
    """Return a string parameter literal for the text, e.g. ``"Show";``."""
    return '"{}";'.format(text)


class Element(Node):
    """Base class for all cue elements.

    By default an element ignores all parameters.

    """
    __slots__ = ()

    def __repr__(self):
        def result():
            cls = self.__class__
            mod = cls.__module__.split('.')[-1]
            yield "{}.{}".format(mod, cls.__name__)
            head = self.repr_head()
            if head is not None:
                yield head
            if len(self):
                yield "({} child{})".format(len(self), '' if len(self) == 1 else 'ren')
        return "<{}>".format(" ".join(result()))

    def repr_head(self):
        """Return a short description for the repr, or None.

        The default implementation returns None.

        """
        return None

    def add_num_param(self, value):
        """Receive a numeric parameter."""
        pass

    def add_str_param(self, text):
        """Receive a string parameter."""
        pass

    def write(self):
        """Return the cue list notation of this element and its children."""
        return ''.join(n.write() for n in self)


class ComplexElement(Element):
    """Base class for elements that can have child elements.

    A complex element is open until :meth:`finish` is called.

    """
    __slots__ = ('_closed',)

    def __init__(self, *children, closed=False):
        self._closed = closed
        super().__init__(*children)

    def is_closed(self):
        """Return True if the element has been finished."""
        return self._closed

    def finish(self):
        """Close the element. Calling this more than once is harmless."""
        self._closed = True

    def append_child(self, child):
        """Append a child element."""
        self.append(child)

    def body_equals(self, other):
        return self._closed == other._closed


class ChannelData(Element):
    """A single channel write: set ``channel`` to ``value``.

    The first numeric parameter is the channel, the second the value; later
    parameters overwrite the value. The channel is stored as an unsigned
    16-bit number and the value as a byte.

    """
    __slots__ = ('channel', 'value', '_received')

    def __init__(self, channel=0, value=0):
        super().__init__()
        self.channel = channel
        self.value = value
        self._received = 0

    def __str__(self):
        return "Ch {}: {}".format(self.channel, self.value)

    def repr_head(self):
        return "{}={}".format(self.channel, self.value)

    def add_num_param(self, value):
        if self._received == 0:
            self.channel = value & 0xFFFF
        else:
            self.value = value & 0xFF
        self._received += 1

    def append(self, node):
        raise TypeError("ChannelData can't have child elements")

    def body_equals(self, other):
        return self.channel == other.channel and self.value == other.value

    def write(self):
        return "BP" + write_number(self.channel) + write_number(self.value)


class KeyFrame(ComplexElement):
    """A timed step in the cue list, holding :class:`ChannelData` children.

    Every numeric parameter sets the ``delay`` in milliseconds. An empty
    keyframe is created closed.

    """
    __slots__ = ('delay', 'empty')

    def __init__(self, delay=0, *children, empty=False):
        self.delay = delay
        self.empty = empty
        super().__init__(*children, closed=empty)

    def __str__(self):
        return "KeyFrame lasts for {} ms.".format(self.delay)

    def repr_head(self):
        return "{}ms{}".format(self.delay, " empty" if self.empty else "")

    def add_num_param(self, value):
        self.delay = value

    def body_equals(self, other):
        return super().body_equals(other) and \
            self.delay == other.delay and self.empty == other.empty

    def write(self):
        if self.empty:
            return "kF" + write_number(self.delay)
        text = "KF" + write_number(self.delay) + super().write()
        if self.is_closed():
            text += "kf"
        return text


class Delay(ComplexElement):
    """Wait for a beat signal, or a number of milliseconds.

    A delay is always closed and never has children. Receiving a numeric
    parameter switches the mode to :attr:`MILLISECONDS`.

    """
    __slots__ = ('mode', 'ms')

    BEAT_SIGNAL = 0
    MILLISECONDS = 1

    def __init__(self, ms=None):
        super().__init__(closed=True)
        if ms is None:
            self.mode = self.BEAT_SIGNAL
            self.ms = 0
        else:
            self.mode = self.MILLISECONDS
            self.ms = ms

    def __str__(self):
        if self.mode == self.BEAT_SIGNAL:
            return "Wait for BeatSignal."
        return "Delay {} ms".format(self.ms)

    def repr_head(self):
        return "beat" if self.mode == self.BEAT_SIGNAL else "{}ms".format(self.ms)

    def is_closed(self):
        return True

    def append_child(self, child):
        pass

    def add_num_param(self, value):
        self.ms = value
        self.mode = self.MILLISECONDS

    def body_equals(self, other):
        return self.mode == other.mode and self.ms == other.ms

    def write(self):
        if self.mode == self.BEAT_SIGNAL:
            return "WB"
        return "WM" + write_number(self.ms)


class Iteration(ComplexElement):
    """Base class for loops; the children are complex elements themselves."""
    __slots__ = ()

    def append_child(self, child):
        if not isinstance(child, ComplexElement):
            raise TypeError("an iteration can only contain complex elements, not {}".format(
                type(child).__name__))
        self.append(child)


class ForIteration(Iteration):
    """A counted loop.

    Every numeric parameter is added to ``target``.

    """
    __slots__ = ('iter', 'target', 'direction')

    INCREMENT = 0
    DECREMENT = 1

    def __init__(self, iter=0, target=0, direction=INCREMENT, *children):
        self.iter = iter
        self.target = target
        self.direction = direction
        super().__init__(*children)

    def repr_head(self):
        return "{}{}{}".format(self.iter,
            "->" if self.direction == self.INCREMENT else "<-", self.target)

    def add_num_param(self, value):
        self.target += value

    def body_equals(self, other):
        return super().body_equals(other) and self.iter == other.iter and \
            self.target == other.target and self.direction == other.direction

    def write(self):
        return "FI" + super().write()


class InfiniteIteration(Iteration):
    """A loop without end. Numeric parameters are ignored."""
    __slots__ = ()

    def write(self):
        return "II" + super().write()


class SchemaVersion(enum.IntEnum):
    """The known schema versions of a document head."""
    Empty = 0
    P400 = 4
    P676 = 6


def schema_version(value):
    """Return the SchemaVersion for the value, or the value itself if unknown."""
    try:
        return SchemaVersion(value)
    except ValueError:
        return value


class Head(Element):
    """Base class for a document head."""
    __slots__ = ('schema_version', 'title')

    def __init__(self):
        super().__init__()
        self.schema_version = SchemaVersion.Empty
        self.title = ''

    def repr_head(self):
        return "{} {}".format(int(self.schema_version), reprlib.repr(self.title))

    def body_equals(self, other):
        return self.schema_version == other.schema_version and self.title == other.title


class PredefinedSchemaHead(Head):
    """A head referring to a builtin schema by id.

    The first numeric parameter sets the schema version (also when it is 0),
    later ones the schema id. A string parameter sets the title.

    """
    __slots__ = ('schema_id', '_versioned')

    def __init__(self, schema_id=0):
        super().__init__()
        self.schema_id = schema_id
        self._versioned = False

    def add_num_param(self, value):
        if not self._versioned:
            self.schema_version = schema_version(value)
            self._versioned = True
        else:
            self.schema_id = value

    def add_str_param(self, text):
        self.title = text

    def body_equals(self, other):
        return super().body_equals(other) and self.schema_id == other.schema_id

    def write(self):
        text = "X@" + write_number(self.schema_version)
        if self.schema_id:
            text += "X@" + write_number(self.schema_id)
        if self.title:
            text += "X+" + write_string(self.title)
        return text


class LinkedSchemaHead(Head):
    """A head referring to an external schema file.

    Numeric parameters set the schema version. The first string parameter
    sets the title (also when it is empty), the following ones the schema
    path.

    """
    __slots__ = ('schema_path', '_titled')

    def __init__(self):
        super().__init__()
        self.schema_path = ''
        self._titled = False

    def add_num_param(self, value):
        self.schema_version = schema_version(value)

    def add_str_param(self, text):
        if not self._titled:
            self.title = text
            self._titled = True
        else:
            self.schema_path = text

    def body_equals(self, other):
        return super().body_equals(other) and self.schema_path == other.schema_path

    def write(self):
        text = "X+" + write_string(self.title) + write_string(self.schema_path)
        if self.schema_version:
            text += "X@" + write_number(self.schema_version)
        return text


class Body(ComplexElement):
    """The document body, a container for other elements."""
    __slots__ = ()
