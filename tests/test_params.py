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
Test the parameter literals.
"""

### find cueread
import sys
sys.path.insert(0, '.')

from cueread.params import Literal, ParameterSequence, parse_number, unquote
from cueread.elements import ChannelData


def test_parse_number():
    assert parse_number("0H1E") == 30
    assert parse_number("0X1e") == 30
    assert parse_number("0D30") == 30
    assert parse_number("0B11110") == 30
    assert parse_number("0H0Au") == 10      # trailing garbage is ignored
    assert parse_number("0D12AB") == 12
    assert parse_number("0Q1F") == 31       # unknown marker: hexadecimal
    assert parse_number("0H") == 0
    assert parse_number("0") == 0
    # radix marker ignored, always hexadecimal
    assert parse_number("0D30", False) == 48
    assert parse_number("0B11", False) == 17


def test_unquote():
    assert unquote('"My show"') == "My show"
    assert unquote('My show') == "My show"
    assert unquote('"') == '"'
    assert unquote('""') == ''


def test_literal():
    l = Literal()
    assert l.is_malformed()     # empty
    for pos, c in enumerate("0H2A", 5):
        l.add(c, pos)
    assert l.start == 5
    assert not l.is_malformed()
    assert l.number() == 42
    l.clear()
    l.add('1', 3)
    assert l.is_malformed()
    l.clear()
    for pos, c in enumerate('"a;b"'):
        l.add(c, pos)
        if c == 'a':
            assert l.quoted
    assert not l.quoted
    assert l.string() == "a;b"


def test_sequence():
    cd = ChannelData()
    p = ParameterSequence()
    p.start(2, cd)
    assert p.deliver(cd, 1) is True
    assert p.target is cd
    assert p.deliver(cd, 2) is False
    assert p.target is None
    assert (cd.channel, cd.value) == (1, 2)

    p.start(2, cd)
    p.literal.add('0', 0)
    p.cancel()
    assert p.pending == 0
    assert p.target is None
    assert p.literal.text == ''
