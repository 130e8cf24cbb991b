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
Run the cueread command line program with ``python -m cueread``.
"""

from cueread.cli import app

app(prog_name="cueread")
