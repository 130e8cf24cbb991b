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
Cue list source text language and transformation definition.

Cue list files may be spread over many lines and contain whitespace for
readability. Before the tokenizer reads the text, it is decoded: all
whitespace outside double quotes is removed and quoted spans are kept as
they are, quotes included::

    >>> from parce.transform import transform_text
    >>> from cueread.lang.cuetext import CueText
    >>> transform_text(CueText.root, 'X! X+ "My show" ;\\n KF 0H0A; kf')
    'X!X+"My show";KF0H0A;kf'

"""

import parce.action as a
from parce import Language, lexicon, default_action, skip
from parce.transform import Transform


class CueText(Language):
    """Cue list source text."""
    @lexicon
    def root(cls):
        yield r'"', a.String, cls.string
        yield r'\s+', skip
        yield default_action, a.Text

    @lexicon
    def string(cls):
        """A quoted span, ending at the closing double quote."""
        yield r'"', a.String, -1
        yield default_action, a.String


class CueTextTransform(Transform):
    """Transform cue list source text to the decoded string."""
    def root(self, items):
        """Join the text, the whitespace is already skipped."""
        return ''.join(i.text if i.is_token else i.obj for i in items)

    def string(self, items):
        """Return the text of a quoted span, including the closing quote."""
        return ''.join(i.text for i in items if i.is_token)
