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
The cueread module.

Reads the compact cue list notation for stage lighting into a tree of cue
elements::

    >>> import cueread
    >>> result = cueread.parse('X! X@ 0H04;  KF 0H0A;  BP 0H01; 0H1E;  kf')
    >>> result.document.head
    <elements.PredefinedSchemaHead 4 ''>
    >>> result.cuelist.dump()
    <CueList (1 child)>
     ╰╴<elements.KeyFrame 10ms (1 child)>
        ╰╴<elements.ChannelData 1=30>

"""

from parce.transform import transform_text

from .pkginfo import version, version_string
from .lang.cuetext import CueText
from .tokenizer import ParseError, Parser


__all__ = ('decode', 'load', 'parse', 'ParseError', 'version', 'version_string')


def decode(text):
    """Return the text with whitespace outside quoted spans removed."""
    return transform_text(CueText.root, text) or ''


def parse(text, **options):
    """Decode and read the cue list ``text``; return a :class:`~.tokenizer.ParseResult`.

    The keyword arguments are passed to the :class:`~.tokenizer.Parser`.
    Raises :class:`~.tokenizer.ParseError` if the text can't be read.

    """
    return Parser(**options).parse(decode(text))


def load(filename, encoding=None, errors=None, newline=None, **options):
    """Convenience function to read the cue list in ``filename``.

    The ``encoding``, ``errors`` and ``newline`` arguments are passed to
    Python's :func:`open` function; the encoding defaults to UTF-8. Raises
    :class:`OSError` if the file can't be read. Other keyword arguments are
    passed to the :class:`~.tokenizer.Parser`.

    """
    with open(filename, encoding=encoding or "utf-8", errors=errors, newline=newline) as f:
        text = f.read()
    return parse(text, **options)
