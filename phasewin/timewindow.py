#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Time windows and the interval algebra used to build them.

A :class:`~Timewindow` is an immutable closed interval ``[start, end]`` in
seconds after the event origin. Both values are rounded off to
:data:`DECIMALS` decimal places upon construction so that windows computed
along different paths compare and hash equal.

The module level functions operate on lists of windows that are sorted by
their start time. They do not sort on their own; garbage in, garbage out.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
from decimal import Decimal, ROUND_HALF_UP
import functools

from phasewin import InvalidIntervalError

# Number of decimal places the time values are rounded to.
DECIMALS = 2
# Maximum number of integer digits of a typical start or end time. Only used
# for padding text output.
TYPICAL_MAX_INTEGER_DIGITS = 4

_QUANTUM = Decimal(1).scaleb(-DECIMALS)


def round_time(value):
    """
    Rounds a time value half-up to :data:`DECIMALS` decimal places.

    The shortest decimal representation of the float is rounded and not its
    binary value, thus 0.125 becomes 0.13 and rounding is idempotent.

    >>> round_time(0.125)
    0.13
    >>> round_time(-1.005)
    -1.01
    """
    return float(Decimal(repr(float(value))).quantize(
        _QUANTUM, rounding=ROUND_HALF_UP))


@functools.total_ordering
class Timewindow(object):
    __slots__ = ["_start", "_end"]

    def __init__(self, start, end):
        """
        Object representing one time window.

        :param start: The start time of the window in seconds.
        :type start: float
        :param end: The end time of the window in seconds. Must not be
            smaller than the start time after rounding.
        :type end: float
        """
        start = round_time(start)
        end = round_time(end)
        if end < start:
            raise InvalidIntervalError(
                "Invalid time window: start %s is later than end %s." % (
                    start, end))
        self._start = start
        self._end = end

    @property
    def start(self):
        return self._start

    @property
    def end(self):
        return self._end

    @property
    def length(self):
        """
        The length of the window in seconds.
        """
        return self._end - self._start

    def overlaps(self, other):
        """
        Closed interval test. Windows that merely touch overlap.
        """
        return other.start <= self.end and self.start <= other.end

    def merge(self, other):
        """
        Returns the smallest window containing both windows. If they do not
        overlap, the gap between them is part of the result.
        """
        return Timewindow(min(self.start, other.start),
                          max(self.end, other.end))

    def shift(self, delta):
        """
        Returns a copy translated by ``delta`` seconds.
        """
        return Timewindow(self.start + delta, self.end + delta)

    def contains(self, time):
        return self.start <= time <= self.end

    def _key(self):
        return (self._start, self._end)

    def __eq__(self, other):
        if not isinstance(other, Timewindow):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other):
        if not isinstance(other, Timewindow):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "Timewindow(%r, %r)" % (self.start, self.end)

    def __str__(self):
        return "%.2f %.2f" % (self.start, self.end)


def merge_windows(windows):
    """
    Coalesces overlapping or touching windows.

    :param windows: Windows sorted by their start time.
    :return: A list of disjoint windows in order covering the same time
        span as the input windows.

    >>> merge_windows([Timewindow(0, 10), Timewindow(10, 20),
    ...                Timewindow(25, 30)])
    [Timewindow(0.0, 20.0), Timewindow(25.0, 30.0)]
    """
    merged = []
    current = None
    for window in windows:
        if current is None:
            current = window
        elif current.overlaps(window):
            current = current.merge(window)
        else:
            merged.append(current)
            current = window
    if current is not None:
        merged.append(current)
    return merged


def cut_window(use_window, avoid_window, minimum_length=0.0):
    """
    Removes the part of ``use_window`` that overlaps ``avoid_window``.

    Only one piece survives a cut. If the avoid window starts inside the use
    window, the part before it is kept even if there is something left after
    it.

    :param use_window: The window to cut.
    :param avoid_window: The window to remove.
    :param minimum_length: Survivors shorter than this are eliminated.
    :return: The remaining window or ``None`` if nothing usable remains.
    """
    if not use_window.overlaps(avoid_window):
        return use_window
    if avoid_window.start <= use_window.start:
        if use_window.end <= avoid_window.end:
            return None
        window = Timewindow(avoid_window.end, use_window.end)
    else:
        window = Timewindow(use_window.start, avoid_window.start)
    if window.length < minimum_length:
        return None
    return window


def _split_window(use_window, avoid_window, minimum_length):
    """
    True difference of two windows. Returns a list with zero, one, or two
    windows.
    """
    if not use_window.overlaps(avoid_window):
        return [use_window]
    pieces = []
    if use_window.start < avoid_window.start:
        pieces.append(Timewindow(use_window.start, avoid_window.start))
    if avoid_window.end < use_window.end:
        pieces.append(Timewindow(avoid_window.end, use_window.end))
    return [_i for _i in pieces if _i.length >= minimum_length]


def subtract_windows(use_windows, avoid_windows, minimum_length=0.0,
                     split=False):
    """
    Eliminates the avoid windows from the use windows.

    :param use_windows: Windows to keep, sorted by start time.
    :param avoid_windows: Windows to remove. Must be sorted and merged with
        :func:`merge_windows`.
    :param minimum_length: Pieces shorter than this are dropped after each
        cut.
    :param split: By default each use window results in at most one window
        (see :func:`cut_window`). If ``True``, an avoid window strictly
        inside a use window leaves both the leading and the trailing part.
    :return: The usable windows, sorted by start time. Might be empty.
    """
    usable = []
    for window in use_windows:
        if split:
            pieces = [window]
            for avoid in avoid_windows:
                pieces = [_j for _i in pieces
                          for _j in _split_window(_i, avoid, minimum_length)]
                if not pieces:
                    break
            usable.extend(pieces)
            continue
        for avoid in avoid_windows:
            window = cut_window(window, avoid, minimum_length)
            if window is None:
                break
        if window is not None:
            usable.append(window)
    return usable


def windows_around(times, front_shift, rear_shift):
    """
    Creates one window ``[t - front_shift, t + rear_shift]`` per time and
    returns them merged.
    """
    return merge_windows(sorted(
        Timewindow(_i - front_shift, _i + rear_shift) for _i in times))
