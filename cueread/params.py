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
Assembling parameters for elements.

Some tokens are followed by one or more parameters, e.g. ``BP0H01;0H2A;``
is followed by two numeric parameters. The tokenizer collects the characters
of each parameter in a :class:`Literal`, and a :class:`ParameterSequence`
keeps track of how many parameters are still expected and which element
receives them.

A numeric literal consists of a ``0``, a radix marker and the digits::

    0H1E;   0X1E;   hexadecimal 30
    0D30;           decimal 30
    0B11110;        binary 30

A string literal is any text up to a ``;`` that is not enclosed in double
quotes; one pair of enclosing quotes is removed.

"""

import itertools


#: The base selected by a radix marker.
RADIX = {
    'H': 16,
    'X': 16,
    'D': 10,
    'B': 2,
}

_DIGITS = '0123456789ABCDEF'


def parse_number(text, honour_radix=True):
    """Return the integer value of the numeric literal ``text``.

    The ``text`` is the literal without the terminating ``;``, e.g. ``"0H1E"``.
    The longest run of valid digits after the radix marker is used, so
    trailing garbage is ignored; no digits at all yields 0. Unknown markers
    select hexadecimal.

    If ``honour_radix`` is False, the digits are always read as hexadecimal,
    regardless of the marker.

    """
    base = RADIX.get(text[1:2].upper(), 16) if honour_radix else 16
    valid = _DIGITS[:base]
    digits = ''.join(itertools.takewhile(lambda c: c in valid, text[2:].upper()))
    return int(digits, base) if digits else 0


def unquote(text):
    """Remove one pair of enclosing double quotes, if present."""
    if len(text) > 1 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


class Literal:
    """Collects the characters of one parameter literal."""
    __slots__ = ('text', 'start', 'quoted')

    def __init__(self):
        self.clear()

    def __repr__(self):
        return "<{} {!r} at {}>".format(type(self).__name__, self.text, self.start)

    def clear(self):
        """Forget the collected characters."""
        self.text = ''
        self.start = None
        self.quoted = False

    def add(self, char, pos):
        """Add a character found at position ``pos`` in the source text."""
        if self.start is None:
            self.start = pos
        if char == '"':
            self.quoted = not self.quoted
        self.text += char

    def is_malformed(self):
        """Return True if this can't be a numeric literal (not starting with ``0``)."""
        return not self.text.startswith('0')

    def number(self, honour_radix=True):
        """Return the integer value, see :func:`parse_number`."""
        return parse_number(self.text, honour_radix)

    def string(self):
        """Return the string value, see :func:`unquote`."""
        return unquote(self.text)


class ParameterSequence:
    """Tracks the parameters an element is still waiting for.

    The ``target`` is the element that explicitly awaits the parameters. If
    there is no target, the tokenizer delivers values to the last open
    keyframe.

    """
    __slots__ = ('pending', 'target', 'literal')

    def __init__(self):
        self.pending = 0
        self.target = None
        self.literal = Literal()

    def __repr__(self):
        return "<{} pending={} target={!r}>".format(type(self).__name__, self.pending, self.target)

    def start(self, count, target=None):
        """Start waiting for ``count`` parameters for the ``target`` element."""
        self.pending = count
        self.target = target
        self.literal.clear()

    def cancel(self):
        """Drop the current literal and all remaining parameters."""
        self.start(0)

    def deliver(self, element, value, numeric=True):
        """Give a value to the element and return True if more parameters follow.

        When the sequence is complete, the target is released.

        """
        if numeric:
            element.add_num_param(value)
        else:
            element.add_str_param(value)
        self.literal.clear()
        self.pending -= 1
        if self.pending > 0:
            return True
        self.target = None
        return False
