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
Test the tokenizer.
"""

### find cueread
import sys
sys.path.insert(0, '.')

import pytest

import cueread
from cueread.cuelist import CueList, Document
from cueread.elements import (
    ChannelData, ForIteration, InfiniteIteration, KeyFrame, LinkedSchemaHead,
    PredefinedSchemaHead, SchemaVersion,
)
from cueread.tokenizer import Cursor, ParseError, Parser, parse


def channels(kf):
    return [(cd.channel, cd.value) for cd in kf / ChannelData]


def test_document_scenario():
    result = cueread.parse("X!X@0H04;KF0H0Au;BP0H01;0H1E;kf")
    head = result.document.head
    assert isinstance(head, PredefinedSchemaHead)
    assert head.schema_version is SchemaVersion.P400
    assert len(result.cuelist) == 1
    kf = result.cuelist[0]
    assert kf.delay == 10
    assert kf.is_closed()
    assert channels(kf) == [(1, 30)]

    lines = result.trace.splitlines()
    assert lines[0] == "Document"
    assert "Head" in lines
    assert "NEW KeyFrame!" in lines
    assert lines[-2:] == ["Ch 1: 30", "KeyFrame lasts for 10 ms."]
    assert result.cuelist.dump_text().splitlines() == [
        "KeyFrame lasts for 10 ms. childs: 1",
        "Ch 1: 30",
    ]


def test_keyframe_pairs():
    text = (
        "KF0H01;BP0H01;0H02;kf"
        "KF0H02;kf"
        "KF0H03;BP0H03;0H04;BP0H05;0H06;kf"
    )
    cl = parse(text).cuelist
    assert len(cl) == 3
    assert all(kf.is_closed() for kf in cl)
    assert [kf.delay for kf in cl] == [1, 2, 3]
    assert [len(kf) for kf in cl] == [1, 0, 2]
    assert channels(cl[2]) == [(3, 4), (5, 6)]


def test_channel_order():
    kf = parse("KF0H00;BP0H01;0H2A;kf").cuelist[0]
    assert channels(kf) == [(1, 42)]
    # a zero channel number is still the first parameter
    kf = parse("KF0H00;BP0H00;0H05;kf").cuelist[0]
    assert channels(kf) == [(0, 5)]


def test_malformed_literal():
    result = parse("KF0H00;BP1H01;kf")
    kf = result.cuelist[0]
    assert channels(kf) == [(0, 0)]
    assert kf.is_closed()
    assert "There is no parameter." in result.trace
    # the cancelled literal is read again as ordinary text
    assert "1H ;" in result.trace

    # the remaining parameter is cancelled as well
    kf = parse("KF0H00;BP0H01;Z;kf").cuelist[0]
    assert channels(kf) == [(1, 0)]

    # an empty literal is malformed too
    kf = parse("KF;kf").cuelist[0]
    assert kf.delay == 0
    assert kf.is_closed()


def test_keyframe_case():
    # Kf opens a keyframe (its delay "k" is malformed), kf closes it,
    # kF adds an empty one
    result = parse("KfkfkF")
    cl = result.cuelist
    assert len(cl) == 2
    assert cl[0].is_closed()
    assert not cl[0].empty
    assert cl[1].is_closed()
    assert cl[1].empty
    lines = result.trace.splitlines()
    assert lines.index("NEW KeyFrame!") < lines.index("There is no parameter.") \
        < lines.index("End of the KeyFrame.") < lines.index("Empty KeyFrame.")

    # the empty keyframe receives its own delay
    cl = parse("KF0H01;kfkF0H14;").cuelist
    assert [kf.delay for kf in cl] == [1, 20]
    assert [kf.is_closed() for kf in cl] == [True, True]


def test_end_of_text():
    # a pending parameter is delivered at the end of the text
    kf = parse("KF0H0A;").cuelist[0]
    assert kf.delay == 10
    assert not kf.is_closed()

    result = parse("KF1")
    assert result.cuelist[0].delay == 0
    assert result.trace.endswith("There is no parameter.\n1")


def test_radix():
    assert parse("KF0D10;kf").cuelist[0].delay == 10
    assert parse("KF0B101;kf").cuelist[0].delay == 5
    assert parse("KF0X10;kf").cuelist[0].delay == 16
    assert parse("KF0D10;kf", honour_radix=False).cuelist[0].delay == 16
    p = Parser(honour_radix=False)
    assert p.parse("KF0B101;kf").cuelist[0].delay == 0x101
    assert Parser.honour_radix is True


def test_strings():
    result = cueread.parse('X! X+ "My Show"; "shows/main.xsd";')
    head = result.document.head
    assert isinstance(head, LinkedSchemaHead)
    assert head.title == "My Show"
    assert head.schema_path == "shows/main.xsd"

    result = parse("X!X@0H06;X@0H2A;X+Show;")
    head = result.document.head
    assert head.schema_version is SchemaVersion.P676
    assert head.schema_id == 42
    assert head.title == "Show"
    assert result.trace.splitlines() == ["Document", "Head", "Head", "Title"]

    # a semicolon within quotes is part of the string
    result = parse('X!X+"a;b";"c";X@0H04;')
    head = result.document.head
    assert (head.title, head.schema_path) == ("a;b", "c")
    assert head.schema_version is SchemaVersion.P400


def test_trace_only_tokens():
    result = parse("FIII")
    assert result.trace == "ForIterationInfiniteIteration"
    assert [type(it) for it in result.iterations] == [ForIteration, InfiniteIteration]
    assert len(result.cuelist) == 0

    assert parse("WBWM").trace == "<waitBeatSignal /><waitMilliSeconds />"
    assert parse("CL").trace == "CueList\n"
    assert parse("FT").trace == "FadeTime"
    assert parse('"a b"').trace == '"a b"'
    assert parse("0H1F;0D12;0B1;").trace == " H1F D12 B1"
    assert parse("?z").trace == "?Z"
    assert parse("KX").trace == ""


def test_errors():
    with pytest.raises(ParseError) as info:
        parse("kf")
    assert info.value.pos == 1
    assert "no open keyframe" in str(info.value)

    with pytest.raises(ParseError):
        parse("BP0H01;0H02;")

    with pytest.raises(ParseError):
        parse("KF0H00;kfkf")

    # a keyframe must be closed before the next one is started
    with pytest.raises(ParseError) as info:
        parse("KF0H01;BP0H01;0H1E;KF0H02;kf")
    assert info.value.message == "keyframe already open"
    assert info.value.pos == 20

    with pytest.raises(ParseError) as info:
        parse("KfkF")
    assert info.value.pos == 3

    with pytest.raises(ParseError) as info:
        parse("X@0H04;")
    assert info.value.message == "no document"

    with pytest.raises(ValueError):
        cueread.parse("X+title;")


def test_round_trip():
    text = "KF0H0A;BP0H01;0H1E;BP0H00;0H05;kfkF0H14;KF0H3E8;BP0H200;0HFF;kf"
    cl = parse(text).cuelist
    assert [kf.delay for kf in cl] == [10, 20, 1000]
    assert channels(cl[2]) == [(512, 255)]
    assert cl.write() == text
    assert cl.equals(parse(cl.write()).cuelist)

    cl = CueList(KeyFrame(5, ChannelData(7, 8)), KeyFrame(6))
    cl[0].finish()
    assert cl.equals(parse(cl.write()).cuelist)

    doc = parse('X!X@0H04;X@0H07;X+"Show";').document
    assert doc.write() == 'X!X@0H04;X@0H07;X+"Show";'
    assert doc.equals(parse(doc.write()).document)

    # a schema id without a version, a schema path without a title
    doc = Document(PredefinedSchemaHead(7))
    assert doc.write() == "X!X@0H00;X@0H07;"
    assert doc.equals(parse(doc.write()).document)

    head = LinkedSchemaHead()
    head.add_str_param("")
    head.add_str_param("show.xsd")
    doc = Document(head)
    assert doc.write() == 'X!X+"";"show.xsd";'
    other = parse(doc.write()).document
    assert other.head.title == ""
    assert other.head.schema_path == "show.xsd"
    assert doc.equals(other)


def test_parser_reuse():
    p = Parser()
    r1 = p.parse("KF0H01;kf")
    r2 = p.parse("KF0H02;kf")
    assert len(r1.cuelist) == len(r2.cuelist) == 1
    assert r1.cuelist[0].delay == 1
    assert r2.cuelist[0].delay == 2
    assert r2.document is None


def test_cursor():
    c = Cursor("abcd")
    c.advance()
    c.advance()
    assert c.char() == "c"
    c.mark = 2
    c.rewind()
    c.advance()
    assert c.char() == "c"
    with pytest.raises(RuntimeError):
        c.rewind(2)
    c.pos = 4
    assert c.at_end()
