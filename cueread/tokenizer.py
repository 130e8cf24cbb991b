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
The tokenizer, a finite state machine that reads decoded cue list text
character by character and builds the cue list.

The text must already be decoded, i.e. without whitespace outside quoted
spans; see :mod:`cueread.lang.cuetext`.

Most tokens consist of two letters, the first one selecting a state and the
second one completing the token. Letters are compared case-insensitively,
except for the keyframe tokens, where the case of the letters decides what
happens:

* ``KF`` and ``Kf`` open a new keyframe,
* ``kF`` adds an empty keyframe, which is closed right away,
* ``kf`` closes the last open keyframe.

While reading, the parser writes a human readable trace of the symbols it
recognized. Example::

    >>> from cueread.tokenizer import parse
    >>> result = parse("KF0H0A;BP0H01;0H1E;kf")
    >>> result.cuelist.dump()
    <CueList (1 child)>
     ╰╴<elements.KeyFrame 10ms (1 child)>
        ╰╴<elements.ChannelData 1=30>
    >>> print(result.trace)
    <BLANKLINE>
    NEW KeyFrame!
    <BLANKLINE>
    Loading channel data...
    End of the KeyFrame.
    Ch 1: 30
    KeyFrame lasts for 10 ms.
    <BLANKLINE>

"""

import collections
import enum
import logging

from parce.util import Dispatcher

from .cuelist import CueList, Document
from .elements import (
    ChannelData, ForIteration, InfiniteIteration, KeyFrame,
    LinkedSchemaHead, PredefinedSchemaHead,
)
from .params import ParameterSequence


logger = logging.getLogger(__name__)


class State(enum.Enum):
    """The states of the tokenizer."""
    Default = enum.auto()
    LetterC = enum.auto()
    LetterK = enum.auto()
    LetterB = enum.auto()
    LetterW = enum.auto()
    LetterF = enum.auto()
    LetterI = enum.auto()
    QuotationMark = enum.auto()
    Number = enum.auto()
    NumberHex = enum.auto()
    NumberDec = enum.auto()
    NumberBin = enum.auto()
    Command = enum.auto()
    WaitParamNum = enum.auto()
    WaitParamStr = enum.auto()
    ReceivedParamNum = enum.auto()
    ReceivedParamStr = enum.auto()
    NoNumParam = enum.auto()


#: The state selected by the first character of a token.
LEADING = {
    'C': State.LetterC,
    'K': State.LetterK,
    'B': State.LetterB,
    'W': State.LetterW,
    'F': State.LetterF,
    'I': State.LetterI,
    '"': State.QuotationMark,
    '0': State.Number,
    'X': State.Command,
}

#: The states that still have work to do when the text ends.
PENDING = (State.ReceivedParamNum, State.ReceivedParamStr, State.NoNumParam)


#: The result of :meth:`Parser.parse`.
ParseResult = collections.namedtuple("ParseResult", "cuelist document iterations trace")
ParseResult.cuelist.__doc__ = "The :class:`~cueread.cuelist.CueList` with the keyframes."
ParseResult.document.__doc__ = "The :class:`~cueread.cuelist.Document`, or None."
ParseResult.iterations.__doc__ = "The iterations that were read, not attached to the cue list."
ParseResult.trace.__doc__ = "The trace text."


class ParseError(ValueError):
    """Raised when the text can't be read any further.

    The ``pos`` attribute holds the position in the decoded text of the
    character that was read when the error occurred.

    """
    def __init__(self, message, pos):
        super().__init__(message, pos)
        self.message = message
        self.pos = pos

    def __str__(self):
        return "{} (at position {})".format(self.message, self.pos)


class Cursor:
    """The scan position in the text.

    The parser calls :meth:`advance` after each character; a state can
    :meth:`rewind` the position to have characters read again. A rewind can't
    move back further than the :attr:`mark`, which the parser sets at the
    start of each parameter literal.

    """
    __slots__ = ('text', 'pos', 'mark')

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.mark = 0

    def __repr__(self):
        return "<{} {}/{}>".format(type(self).__name__, self.pos, len(self.text))

    def at_end(self):
        """Return True if all characters have been read."""
        return self.pos >= len(self.text)

    def char(self):
        """Return the character at the current position."""
        return self.text[self.pos]

    def advance(self):
        """Go to the next character."""
        self.pos += 1

    def rewind(self, count=1):
        """Go back ``count`` characters.

        After the following :meth:`advance` the character ``count - 1``
        positions before the current one is read again. So ``rewind(1)``
        repeats the current character.

        """
        pos = self.pos - count
        if pos + 1 < self.mark:
            raise RuntimeError("can't rewind past the start of the current token")
        self.pos = pos


class Trace:
    """Collects the trace text written by the parser."""
    __slots__ = ('_parts',)

    def __init__(self):
        self._parts = []

    def write(self, text):
        """Append text."""
        self._parts.append(text)

    def writeline(self, text=''):
        """Append text and a newline."""
        self._parts.append(text + '\n')

    def text(self):
        """Return the trace text."""
        return ''.join(self._parts)


class Parser:
    """Reads decoded cue list text and builds the cue list.

    A Parser can be reused; every call to :meth:`parse` starts from scratch.

    """

    #: If True, the radix marker of numeric parameters selects the base;
    #: if False, the digits are always read as hexadecimal.
    honour_radix = True

    def __init__(self, honour_radix=None):
        if honour_radix is not None:
            self.honour_radix = honour_radix
        self._reset('')

    def _reset(self, text):
        """Initialize the state for reading ``text``."""
        self.cursor = Cursor(text)
        self.state = State.Default
        self.previous = '\0'
        self.params = ParameterSequence()
        self.cuelist = CueList()
        self.document = None
        self.iterations = []
        self.trace = Trace()

    def parse(self, text):
        """Read the decoded ``text`` and return a :class:`ParseResult`.

        Raises :class:`ParseError` if a channel write or a keyframe end is
        found when there is no open keyframe, a keyframe is started while
        another one is still open, or a head is set before a document was
        started.

        """
        self._reset(text)
        cursor = self.cursor
        while True:
            while not cursor.at_end():
                letter = cursor.char()
                self.state = self._state(self.state, letter, letter.upper())
                self.previous = letter
                cursor.advance()
            if self.state not in PENDING:
                break
            # the end of the text terminates a pending parameter
            self.state = self._state(self.state, '', '')
            cursor.advance()
        result = ParseResult(self.cuelist, self.document, self.iterations, self.trace.text())
        logger.debug("read %d keyframes", len(self.cuelist))
        return result

    def last_open(self):
        """Return the last open keyframe, raise ParseError if there is none."""
        kf = self.cuelist.last_open()
        if kf is None:
            raise ParseError("no open keyframe", self.cursor.pos)
        return kf

    def check_closed(self):
        """Raise ParseError if a keyframe is still open."""
        if self.cuelist.last_open() is not None:
            raise ParseError("keyframe already open", self.cursor.pos)

    def head(self, cls):
        """Return the head of the document, creating a ``cls`` instance if needed.

        Raises ParseError if there is no document.

        """
        if self.document is None:
            raise ParseError("no document", self.cursor.pos)
        if self.document.head is None:
            self.document.head = cls()
        return self.document.head

    def add_keyframe(self, empty=False):
        """Append a new keyframe that awaits its delay parameter."""
        kf = KeyFrame(empty=empty)
        self.cuelist.append(kf)
        self.params.start(1, kf)
        logger.debug("keyframe %d added at %d", len(self.cuelist), self.cursor.pos)
        return State.WaitParamNum

    def collect(self, letter):
        """Add a character to the current parameter literal."""
        literal = self.params.literal
        if literal.start is None:
            self.cursor.mark = self.cursor.pos
        literal.add(letter, self.cursor.pos)

    _state = Dispatcher()

    @_state(State.Default)
    def _default(self, letter, c):
        try:
            state = LEADING[c]
        except KeyError:
            logger.debug("unrecognized character %r at %d", letter, self.cursor.pos)
            self.trace.write(c)
            return State.Default
        if state is State.QuotationMark:
            self.trace.write(letter)
        return state

    @_state(State.LetterC)
    def _letter_c(self, letter, c):
        if c == 'L':
            self.trace.writeline("CueList")
        return State.Default

    @_state(State.LetterK)
    def _letter_k(self, letter, c):
        if c != 'F':
            logger.debug("unrecognized token K%s at %d", letter, self.cursor.pos)
            return State.Default
        # the previous character is the K
        if self.previous.isupper():
            self.check_closed()
            self.trace.writeline("\nNEW KeyFrame!")
            return self.add_keyframe()
        elif letter.isupper():
            self.check_closed()
            self.trace.writeline("\nEmpty KeyFrame.")
            return self.add_keyframe(empty=True)
        kf = self.cuelist.close_last()
        if kf is None:
            raise ParseError("no open keyframe", self.cursor.pos)
        self.trace.writeline("\nEnd of the KeyFrame.")
        for cd in kf / ChannelData:
            self.trace.writeline(str(cd))
        self.trace.writeline(str(kf))
        return State.Default

    @_state(State.LetterB)
    def _letter_b(self, letter, c):
        if c != 'P':
            return State.Default
        self.trace.write("\nLoading channel data...")
        cd = ChannelData()
        self.last_open().append_child(cd)
        self.params.start(2, cd)
        return State.WaitParamNum

    @_state(State.LetterW)
    def _letter_w(self, letter, c):
        if c == 'B':
            self.trace.write("<waitBeatSignal />")
        elif c == 'M':
            self.trace.write("<waitMilliSeconds />")
        return State.Default

    @_state(State.LetterF)
    def _letter_f(self, letter, c):
        if c == 'I':
            self.trace.write("ForIteration")
            self.iterations.append(ForIteration())
        elif c == 'T':
            self.trace.write("FadeTime")
        return State.Default

    @_state(State.LetterI)
    def _letter_i(self, letter, c):
        if c == 'I':
            self.trace.write("InfiniteIteration")
            self.iterations.append(InfiniteIteration())
        return State.Default

    @_state(State.QuotationMark)
    def _quotation_mark(self, letter, c):
        self.trace.write(letter)
        return State.Default if c == '"' else State.QuotationMark

    _radix_states = {
        'H': ('H', State.NumberHex),
        'X': ('H', State.NumberHex),
        'D': ('D', State.NumberDec),
        'B': ('B', State.NumberBin),
    }

    @_state(State.Number)
    def _number(self, letter, c):
        self.trace.write(' ')
        try:
            marker, state = self._radix_states[c]
        except KeyError:
            return State.Default
        self.trace.write(marker)
        return state

    @_state(State.NumberHex)
    @_state(State.NumberDec)
    @_state(State.NumberBin)
    def _number_digits(self, letter, c):
        if c == ';':
            return State.Default
        self.trace.write(c)
        return self.state

    @_state(State.Command)
    def _command(self, letter, c):
        if c == '!':
            self.trace.writeline("Document")
            self.document = Document()
        elif c == '@':
            self.trace.writeline("Head")
            self.params.start(1, self.head(PredefinedSchemaHead))
            return State.WaitParamNum
        elif c == '+':
            self.trace.writeline("Title")
            head = self.head(LinkedSchemaHead)
            self.params.start(2 if isinstance(head, LinkedSchemaHead) else 1, head)
            return State.WaitParamStr
        return State.Default

    @_state(State.WaitParamNum)
    def _wait_param_num(self, letter, c):
        literal = self.params.literal
        if c == ';':
            if literal.start is None:
                self.cursor.mark = self.cursor.pos
            state = State.ReceivedParamNum
        else:
            self.collect(letter)
            state = State.WaitParamNum
        if literal.is_malformed():
            logger.debug("malformed numeric literal %r at %d", literal.text, self.cursor.pos)
            return State.NoNumParam
        return state

    @_state(State.ReceivedParamNum)
    def _received_param_num(self, letter, c):
        value = self.params.literal.number(self.honour_radix)
        element = self.params.target or self.last_open()
        more = self.params.deliver(element, value)
        self.cursor.rewind()
        return State.WaitParamNum if more else State.Default

    @_state(State.NoNumParam)
    def _no_num_param(self, letter, c):
        self.trace.writeline("There is no parameter.")
        self.cursor.rewind(2)
        self.params.cancel()
        return State.Default

    @_state(State.WaitParamStr)
    def _wait_param_str(self, letter, c):
        literal = self.params.literal
        if c == ';' and not literal.quoted:
            if literal.start is None:
                self.cursor.mark = self.cursor.pos
            return State.ReceivedParamStr
        self.collect(letter)
        return State.WaitParamStr

    @_state(State.ReceivedParamStr)
    def _received_param_str(self, letter, c):
        value = self.params.literal.string()
        element = self.params.target or self.last_open()
        more = self.params.deliver(element, value, numeric=False)
        self.cursor.rewind()
        return State.WaitParamStr if more else State.Default


def parse(text, **options):
    """Read decoded cue list text and return a :class:`ParseResult`.

    The keyword arguments are passed to the :class:`Parser`.

    """
    return Parser(**options).parse(text)
