#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Binary files containing a set of :class:`~phasewin.timewindow_data.
TimewindowData` objects.

The file consists of five sections, all numbers are big-endian:

1. The number of receivers, events, and phases (3 x uint16).
2. Each receiver: station code (8 bytes, space padded), network code (8
   bytes, space padded), latitude and longitude (2 x float64).
3. Each event: the event id (15 bytes, space padded).
4. Each phase: the phase name (16 bytes, space padded).
5. Each time window, composed of 33 bytes:

   * receiver index (int16)
   * event index (int16)
   * indices of up to ten phases arriving in the window (10 x int16), unused
     slots are -1
   * component (int8)
   * start time (float32)
   * end time (float32)

Receivers, events, and phases are sorted before they are indexed and the
windows are written in sorted order, thus the same set of windows always
results in the same file.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import os

import numpy as np

from phasewin import CorruptFileError, EmptyCollectionError, PhasewinError
from phasewin.timewindow_data import (
    Component, MAX_CODE_LENGTH, Receiver, TimewindowData, phases_as_string)

EVENT_ID_LENGTH = 15
PHASE_NAME_LENGTH = 16
# Number of phase slots per window.
MAX_PHASES = 10

COUNTS_DTYPE = np.dtype([("receivers", ">u2"), ("events", ">u2"),
                         ("phases", ">u2")])
RECEIVER_DTYPE = np.dtype([("station", "S%i" % MAX_CODE_LENGTH),
                           ("network", "S%i" % MAX_CODE_LENGTH),
                           ("latitude", ">f8"), ("longitude", ">f8")])
EVENT_DTYPE = np.dtype("S%i" % EVENT_ID_LENGTH)
PHASE_DTYPE = np.dtype("S%i" % PHASE_NAME_LENGTH)
WINDOW_DTYPE = np.dtype([("receiver", ">i2"), ("event", ">i2"),
                         ("phases", ">i2", (MAX_PHASES,)),
                         ("component", "i1"), ("start", ">f4"),
                         ("end", ">f4")])

# Bytes for one time window.
ONE_WINDOW_BYTE = WINDOW_DTYPE.itemsize
assert ONE_WINDOW_BYTE == 33


def _pad(value, length, what, allow_empty=False):
    """
    Space pads an ASCII string to a fixed width.
    """
    if not value and not allow_empty:
        raise PhasewinError("Empty %s cannot be written." % what)
    try:
        value = value.encode("ascii")
    except UnicodeEncodeError:
        raise PhasewinError("%s '%s' is not ASCII." % (what, value))
    if len(value) > length:
        raise PhasewinError("%s '%s' is longer than %i letters." % (
            what, value.decode(), length))
    return value.ljust(length)


def _unpad(value):
    return value.decode("ascii").strip()


def _frombuffer(buf, dtype, count, offset):
    if not count:
        return np.empty(0, dtype=dtype)
    return np.frombuffer(buf, dtype=dtype, count=count, offset=offset)


def _header_bytes(n_receivers, n_events, n_phases):
    return COUNTS_DTYPE.itemsize + RECEIVER_DTYPE.itemsize * n_receivers + \
        EVENT_DTYPE.itemsize * n_events + PHASE_DTYPE.itemsize * n_phases


def write_timewindow_file(windows, filename):
    """
    Writes time windows to a binary file. An existing file is overwritten.

    :param windows: The time windows to write.
    :type windows: iterable of :class:`~phasewin.timewindow_data.
        TimewindowData`
    :param filename: The output filename.
    """
    windows = sorted(set(windows))
    if not windows:
        raise EmptyCollectionError("No time windows to write.")

    receivers = sorted(set(_i.receiver for _i in windows))
    events = sorted(set(_i.event for _i in windows))
    phases = sorted(set(_j for _i in windows for _j in _i.phases))

    if max(len(receivers), len(events), len(phases)) > np.iinfo(np.int16).max:
        raise PhasewinError("Too many receivers, events, or phases for one "
                            "time window file.")

    receiver_map = {_j: _i for _i, _j in enumerate(receivers)}
    event_map = {_j: _i for _i, _j in enumerate(events)}
    phase_map = {_j: _i for _i, _j in enumerate(phases)}

    counts = np.array([(len(receivers), len(events), len(phases))],
                      dtype=COUNTS_DTYPE)
    receiver_table = np.array([
        (_pad(_i.station, MAX_CODE_LENGTH, "Station"),
         _pad(_i.network, MAX_CODE_LENGTH, "Network", allow_empty=True),
         _i.latitude, _i.longitude) for _i in receivers],
        dtype=RECEIVER_DTYPE)
    event_table = np.array(
        [_pad(_i, EVENT_ID_LENGTH, "Event id") for _i in events],
        dtype=EVENT_DTYPE)
    phase_table = np.array(
        [_pad(_i, PHASE_NAME_LENGTH, "Phase name") for _i in phases],
        dtype=PHASE_DTYPE)

    records = np.empty(len(windows), dtype=WINDOW_DTYPE)
    records["phases"] = -1
    for _i, window in enumerate(windows):
        records["receiver"][_i] = receiver_map[window.receiver]
        records["event"][_i] = event_map[window.event]
        # Only the first ten phases fit.
        indices = [phase_map[_j] for _j in sorted(window.phases)]
        indices = indices[:MAX_PHASES]
        records["phases"][_i, :len(indices)] = indices
        records["component"][_i] = int(window.component)
        records["start"][_i] = window.start
        records["end"][_i] = window.end

    with open(filename, "wb") as fh:
        for array in (counts, receiver_table, event_table, phase_table,
                      records):
            fh.write(array.tobytes())


def read_timewindow_file(filename):
    """
    Reads a binary time window file.

    :param filename: The file to read.
    :return: The time windows.
    :rtype: set of :class:`~phasewin.timewindow_data.TimewindowData`
    """
    file_size = os.path.getsize(filename)
    with open(filename, "rb") as fh:
        buf = fh.read()

    if file_size < COUNTS_DTYPE.itemsize:
        raise CorruptFileError("'%s' is too small to be a time window "
                               "file." % filename)
    counts = np.frombuffer(buf, dtype=COUNTS_DTYPE, count=1)[0]
    n_receivers, n_events, n_phases = [int(_i) for _i in counts]
    header_bytes = _header_bytes(n_receivers, n_events, n_phases)
    window_bytes = file_size - header_bytes
    if window_bytes < 0 or window_bytes % ONE_WINDOW_BYTE:
        raise CorruptFileError(
            "'%s' has some problems. %i bytes after the header are not a "
            "multiple of %i." % (filename, window_bytes, ONE_WINDOW_BYTE))

    offset = COUNTS_DTYPE.itemsize
    receiver_table = _frombuffer(buf, RECEIVER_DTYPE, n_receivers, offset)
    offset += RECEIVER_DTYPE.itemsize * n_receivers
    event_table = _frombuffer(buf, EVENT_DTYPE, n_events, offset)
    offset += EVENT_DTYPE.itemsize * n_events
    phase_table = _frombuffer(buf, PHASE_DTYPE, n_phases, offset)
    offset += PHASE_DTYPE.itemsize * n_phases
    records = _frombuffer(buf, WINDOW_DTYPE, window_bytes // ONE_WINDOW_BYTE,
                          offset)

    receivers = [Receiver(_unpad(_i["station"]), _unpad(_i["network"]),
                          float(_i["latitude"]), float(_i["longitude"]))
                 for _i in receiver_table]
    events = [_unpad(_i) for _i in event_table]
    phases = [_unpad(_i) for _i in phase_table]

    windows = set()
    for record in records:
        if record["receiver"] < 0 or record["event"] < 0 or \
                (record["phases"] < -1).any():
            raise CorruptFileError("'%s' has some problems: negative "
                                   "index." % filename)
        try:
            window = TimewindowData(
                start=float(record["start"]),
                end=float(record["end"]),
                receiver=receivers[record["receiver"]],
                event=events[record["event"]],
                component=Component(int(record["component"])),
                phases=set(phases[_i] for _i in record["phases"] if _i != -1))
        except (IndexError, ValueError) as e:
            raise CorruptFileError("'%s' has some problems: %s" % (
                filename, str(e)))
        windows.add(window)
    return windows


def read_and_select(filename, components=None, entries=None):
    """
    Reads a time window file and only keeps some of the windows.

    :param filename: The file to read.
    :param components: Only keep windows of these components. All if None.
    :param entries: Only keep windows whose (event, station, network,
        component) is part of this collection. All if None.
    """
    windows = read_timewindow_file(filename)
    if components is not None:
        components = set(Component.from_string(_i) if isinstance(_i, str)
                         else Component(_i) for _i in components)
        windows = set(_i for _i in windows if _i.component in components)
    if entries is not None:
        entries = set(entries)
        windows = set(
            _i for _i in windows
            if (_i.event, _i.receiver.station, _i.receiver.network,
                _i.component) in entries)
    return windows


def timewindows_to_ascii(windows, filename):
    """
    Writes a sorted, human readable version of the windows.
    """
    with open(filename, "wt") as fh:
        fh.write("# station network latitude longitude event component "
                 "startTime endTime phases\n")
        for window in sorted(windows):
            fh.write("%s\n" % str(window))


def merge_timewindow_files(filenames):
    """
    Returns the union of the windows in all given files.
    """
    windows = set()
    for filename in filenames:
        windows.update(read_timewindow_file(filename))
    return windows


def subtract_timewindow_files(original_filename, subtract_filename):
    """
    Returns the windows of the first file that are not in the second file.
    """
    subtract = read_timewindow_file(subtract_filename)
    return set(_i for _i in read_timewindow_file(original_filename)
               if _i not in subtract)


def intersect_timewindow_files(filename_1, filename_2, match_phases=False,
                               match_component=False):
    """
    Picks the windows of both files whose event and receiver have windows in
    the other file as well.

    :param match_phases: Windows must also have the same phases.
    :param match_component: Windows must also have the same component.
    :return: Tuple of the windows picked from each file.
    """
    windows_1 = read_timewindow_file(filename_1)
    windows_2 = read_timewindow_file(filename_2)

    def _key(window):
        key = (window.event, window.receiver)
        if match_phases:
            key += (window.phases,)
        if match_component:
            key += (window.component,)
        return key

    keys_1 = set(_key(_i) for _i in windows_1)
    keys_2 = set(_key(_i) for _i in windows_2)
    return (set(_i for _i in windows_1 if _key(_i) in keys_2),
            set(_i for _i in windows_2 if _key(_i) in keys_1))


def describe_timewindows(windows):
    """
    Short summary string of a collection of windows.
    """
    windows = list(windows)
    phases = sorted(set(_j for _i in windows for _j in _i.phases))
    return "%i time window(s) for %i event(s) and %i receiver(s). " \
        "Phases: %s" % (len(windows), len(set(_i.event for _i in windows)),
                        len(set(_i.receiver for _i in windows)),
                        phases_as_string(phases))
