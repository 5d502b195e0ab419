#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the time windows of records.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import pytest

from phasewin.timewindow import Timewindow
from phasewin.timewindow_data import (Component, Receiver, TimewindowData,
                                      phases_as_string)


RECEIVER = Receiver("ABC", "XX", 35.0, 135.0)


def test_component():
    assert Component.from_string("Z") is Component.Z
    assert Component.from_string("r") is Component.R
    assert Component.from_string("BHT") is Component.T
    assert Component.from_string(" bhz ") is Component.Z
    assert int(Component.T) == 3
    assert str(Component.R) == "R"
    assert Component(1) is Component.Z
    for value in ["", "BHN", "E"]:
        with pytest.raises(ValueError):
            Component.from_string(value)
    with pytest.raises(ValueError):
        Component(4)


def test_receiver():
    receiver = Receiver(" ABC ", "XX", 35, "135.5")
    assert receiver.station == "ABC"
    assert receiver.latitude == 35.0
    assert receiver.longitude == 135.5
    assert receiver.id == "ABC_XX"
    assert receiver == Receiver("ABC", "XX", 35.0, 135.5)
    assert receiver.to_padded_string() == "ABC   XX   35.0000  135.5000"
    # Empty network codes are fine, empty station codes are not.
    assert Receiver("ABC", "", 0.0, 0.0).network == ""
    with pytest.raises(ValueError):
        Receiver("", "XX", 0.0, 0.0)
    with pytest.raises(ValueError):
        Receiver("ABCDEFGHI", "XX", 0.0, 0.0)
    with pytest.raises(ValueError):
        Receiver("ABC", "XXXXXXXXX", 0.0, 0.0)


def test_timewindow_data_identity():
    a = TimewindowData(480.0, 560.0, RECEIVER, "201001010000A", Component.T,
                       phases=["S"])
    b = TimewindowData(480.0, 560.0, RECEIVER, "201001010000A", 3,
                       phases=["S", "ScS"])
    # The phases are not part of the identity.
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1

    c = TimewindowData(480.0, 560.0, RECEIVER, "201001010000A", Component.Z,
                       phases=["S"])
    d = TimewindowData(480.0, 560.0, RECEIVER, "201002020000B", Component.T,
                       phases=["S"])
    assert a != c
    assert a != d
    assert len({a, b, c, d}) == 3
    assert a.data_entry == ("201001010000A", RECEIVER, Component.T)

    # Plain windows are something else.
    assert a != Timewindow(480.0, 560.0)


def test_timewindow_data_rounding_and_ordering():
    a = TimewindowData(480.004, 559.996, RECEIVER, "201001010000A", 3)
    assert a.start == 480.0
    assert a.end == 560.0
    assert a.phases == frozenset()

    windows = [
        TimewindowData(100.0, 200.0, RECEIVER, "201001010000A", 3),
        TimewindowData(50.0, 60.0, RECEIVER, "201001010000A", 3),
        TimewindowData(10.0, 20.0, RECEIVER, "201001010000A", 1)]
    assert sorted(windows) == [windows[2], windows[1], windows[0]]


def test_with_phases():
    a = TimewindowData(480.0, 560.0, RECEIVER, "201001010000A", 3, ["S"])
    b = a.with_phases(["S", "sS"])
    assert b == a
    assert b.phases == frozenset(["S", "sS"])
    assert a.phases == frozenset(["S"])


def test_string_representation():
    window = TimewindowData(480.0, 560.0, RECEIVER, "201001010000A", 3,
                            ["ScS", "S"])
    assert str(window) == ("ABC   XX   35.0000  135.0000 201001010000A   T "
                           " 480.00  560.00 S,ScS")
    window = window.with_phases([])
    assert str(window).endswith(" null")


def test_phases_as_string():
    assert phases_as_string(["sS", "S", "ScS"]) == "S,ScS,sS"
    assert phases_as_string(set()) == "null"
    assert phases_as_string([""]) == "null"


def test_timewindow_data_is_immutable():
    window = TimewindowData(480.0, 560.0, RECEIVER, "201001010000A", 3,
                            ["S"])
    windows = {window}
    for name, value in [("receiver", Receiver("DEF", "YY", 0.0, 0.0)),
                        ("event", "201002020000B"), ("component", 1),
                        ("phases", frozenset(["ScS"])), ("start", 0.0),
                        ("end", 1000.0)]:
        with pytest.raises(AttributeError):
            setattr(window, name, value)
    assert window in windows
    assert window.event == "201001010000A"
    assert window.phases == frozenset(["S"])


def test_merge_and_shift_keep_the_record():
    a = TimewindowData(480.0, 560.0, RECEIVER, "201001010000A", 3, ["S"])
    b = TimewindowData(550.0, 600.0, RECEIVER, "201001010000A", 3, ["ScS"])
    merged = a.merge(b)
    assert isinstance(merged, TimewindowData)
    assert merged == TimewindowData(480.0, 600.0, RECEIVER, "201001010000A",
                                    3)
    assert merged.phases == frozenset(["S", "ScS"])

    other = TimewindowData(550.0, 600.0, RECEIVER, "201001010000A", 1)
    with pytest.raises(ValueError):
        a.merge(other)
    with pytest.raises(ValueError):
        a.merge(Timewindow(550.0, 600.0))

    shifted = a.shift(-10.0)
    assert isinstance(shifted, TimewindowData)
    assert (shifted.start, shifted.end) == (470.0, 550.0)
    assert shifted.data_entry == a.data_entry
    assert shifted.phases == frozenset(["S"])
