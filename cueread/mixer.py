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
Sending a cue list to a channel output.

A :class:`Mixer` is anything that can set a channel to a value; a lighting
console or an Art-Net node would implement :meth:`Mixer.set_channel`. The
tokenizer never uses a mixer, it is up to the caller to :func:`play` a cue
list.

"""

import logging

from .elements import ChannelData


logger = logging.getLogger(__name__)

#: The number of channels in a DMX universe.
DMX_CHANNELS = 512


class Mixer:
    """Base class for a channel output."""
    def set_channel(self, channel, value):
        """Set the channel to the value (0-255)."""
        raise NotImplementedError


class DmxUniverse(Mixer):
    """A Mixer that keeps the values of one DMX universe in memory.

    Channels are numbered from 1 to 512. Writes to other channels are ignored.

    """
    def __init__(self):
        self.data = bytearray(DMX_CHANNELS)

    def __repr__(self):
        used = sum(1 for v in self.data if v)
        return "<{} ({} channels set)>".format(type(self).__name__, used)

    def __getitem__(self, channel):
        """Return the value of the channel."""
        return self.data[channel - 1]

    def set_channel(self, channel, value):
        if 1 <= channel <= DMX_CHANNELS:
            self.data[channel - 1] = max(0, min(255, value))
        else:
            logger.debug("channel %d out of range, ignored", channel)


def play(cuelist, mixer):
    """Send all channel writes of all keyframes in the cue list to the mixer.

    The keyframes are sent in order, the delays are not waited for. Returns
    the number of channel writes sent.

    """
    count = 0
    for kf in cuelist:
        for cd in kf / ChannelData:
            mixer.set_channel(cd.channel, cd.value)
            count += 1
    return count
