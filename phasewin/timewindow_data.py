#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Time windows attached to one (event, receiver, component) record.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
from collections import namedtuple
import enum

from phasewin.timewindow import Timewindow, TYPICAL_MAX_INTEGER_DIGITS

# Maximum number of letters of station and network codes. Same as the
# alphanumeric fields in SAC headers.
MAX_CODE_LENGTH = 8


class Component(enum.IntEnum):
    """
    Components of ground motion. The values are written to files as a
    single byte.
    """
    Z = 1
    R = 2
    T = 3

    @classmethod
    def from_string(cls, value):
        """
        Accepts "Z", "r", or the last letter of a channel code like "BHT".
        """
        value = str(value).strip().upper()
        if not value:
            raise ValueError("Empty component.")
        try:
            return cls[value[-1]]
        except KeyError:
            raise ValueError("Invalid component '%s'. Components are Z(1) "
                             "R(2) T(3)." % value)

    def __str__(self):
        return self.name


class Receiver(namedtuple("Receiver", ["station", "network", "latitude",
                                       "longitude"])):
    """
    A receiver defined by its station and network code and its position.

    >>> Receiver("ABC", "XX", 35.0, 135.0).id
    'ABC_XX'
    """
    __slots__ = ()

    def __new__(cls, station, network, latitude, longitude):
        station = str(station).strip()
        network = str(network).strip()
        if not station or len(station) > MAX_CODE_LENGTH or \
                len(network) > MAX_CODE_LENGTH:
            raise ValueError(
                "Station '%s' and network '%s' must be 1 to %i letters." % (
                    station, network, MAX_CODE_LENGTH))
        return super(Receiver, cls).__new__(
            cls, station, network, float(latitude), float(longitude))

    @property
    def id(self):
        return "%s_%s" % (self.station, self.network)

    def to_padded_string(self):
        return "%-5s %-2s %9.4f %9.4f" % (self.station, self.network,
                                          self.latitude, self.longitude)


class TimewindowData(Timewindow):
    """
    A time window for an (event, receiver, component) record.

    The phases are the names of the phases that arrive inside the window.
    They are not part of the identity of a window: two windows for the same
    record with the same start and end time are equal.
    """
    __slots__ = ["_receiver", "_event", "_component", "_phases"]

    def __init__(self, start, end, receiver, event, component, phases=()):
        super(TimewindowData, self).__init__(start, end)
        self._receiver = receiver
        self._event = event
        self._component = Component(component)
        self._phases = frozenset(phases)

    @property
    def receiver(self):
        return self._receiver

    @property
    def event(self):
        return self._event

    @property
    def component(self):
        return self._component

    @property
    def phases(self):
        return self._phases

    def merge(self, other):
        """
        Returns the smallest window of the same record containing both
        windows. The phases of both windows are kept.

        :param other: Another window of the same record.
        :type other: :class:`~TimewindowData`
        """
        if not isinstance(other, TimewindowData) or \
                other.data_entry != self.data_entry:
            raise ValueError("Only windows of the same record can be "
                             "merged.")
        return TimewindowData(min(self.start, other.start),
                              max(self.end, other.end), self.receiver,
                              self.event, self.component,
                              self.phases | other.phases)

    def shift(self, delta):
        """
        Returns a copy translated by ``delta`` seconds. The phases are kept.
        """
        return TimewindowData(self.start + delta, self.end + delta,
                              self.receiver, self.event, self.component,
                              self.phases)

    def _key(self):
        return (self.receiver, self.event, self.component, self.start,
                self.end)

    def __eq__(self, other):
        if not isinstance(other, TimewindowData):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other):
        if not isinstance(other, TimewindowData):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "TimewindowData(%r, %r, %r, %r, %s, %r)" % (
            self.start, self.end, self.receiver, self.event,
            self.component.name, sorted(self.phases))

    def __str__(self):
        width = TYPICAL_MAX_INTEGER_DIGITS + 3
        return "%s %-15s %s %*.2f %*.2f %s" % (
            self.receiver.to_padded_string(), self.event, self.component,
            width, self.start, width, self.end,
            phases_as_string(self.phases))

    @property
    def data_entry(self):
        """
        The (event, receiver, component) record the window belongs to.
        """
        return (self.event, self.receiver, self.component)

    def with_phases(self, phases):
        return TimewindowData(self.start, self.end, self.receiver,
                              self.event, self.component, phases)


def phases_as_string(phases):
    """
    Phase names joined with commas, or "null" if there are none.

    >>> phases_as_string({"ScS", "S"})
    'S,ScS'
    >>> phases_as_string([])
    'null'
    """
    phases = sorted(_i for _i in phases if _i)
    if not phases:
        return "null"
    return ",".join(phases)
