#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the travel time information and its text file.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import os

import pytest

from phasewin import PhasewinError
from phasewin.tests.testing_helpers import arrival
from phasewin.timewindow_data import Receiver
from phasewin.travel_time_information import (
    TravelTimeInformation, fastest_arrivals, read_travel_time_file,
    write_travel_time_file)


ABC = Receiver("ABC", "XX", 35.0, 135.0)
DEF = Receiver("DEF", "YY", -10.0, 20.0)


def test_fastest_arrivals():
    times = fastest_arrivals([arrival("S", 510.0), arrival("S", 500.0),
                              arrival("ScS", 700.0), ("sS", 600.0)])
    assert times == {"S": 500.0, "ScS": 700.0, "sS": 600.0}
    assert fastest_arrivals([]) == {}


def test_travel_time_information():
    info = TravelTimeInformation(
        "201001010000A", ABC,
        use_arrivals=[arrival("S", 505.0), arrival("S", 500.0)],
        avoid_arrivals=[arrival("ScS", 700.0)])
    assert info.use_phase_times == {"S": 500.0}
    assert info.avoid_phase_times == {"ScS": 700.0}
    assert info.time_of("S") == 500.0
    assert info.time_of("ScS") == 700.0
    assert info.time_of("sS") is None
    assert str(info) == \
        "Travel times for 201001010000A at ABC_XX: S 500.00, ScS 700.00"

    same = TravelTimeInformation.from_times(
        "201001010000A", ABC, {"S": 500.0}, {"ScS": 700.0})
    assert same == info
    assert hash(same) == hash(info)
    other = TravelTimeInformation.from_times(
        "201001010000A", ABC, {"S": 501.0}, {"ScS": 700.0})
    assert other != info


def test_write_and_read(tmpdir):
    informations = {
        TravelTimeInformation.from_times(
            "201002020000B", DEF, {"S": 650.5}, {}),
        TravelTimeInformation.from_times(
            "201001010000A", ABC, {"S": 500.0, "ScS": 712.34}, {"sS": 540.0}),
    }
    filename = os.path.join(str(tmpdir), "travelTime.inf")
    write_travel_time_file(["S", "ScS"], ["sS"], informations, filename)

    with open(filename, "rt") as fh:
        lines = fh.read().splitlines()
    assert lines[0] == "# usePhases..."
    assert lines[1] == "S ScS"
    assert lines[2] == "# avoidPhases..."
    assert lines[3] == "sS"
    assert lines[4].startswith("#")
    assert lines[5] == ("201001010000A   ABC   XX   35.0000  135.0000  "
                        "500.00  712.34  540.00")
    assert lines[6] == ("201002020000B   DEF   YY  -10.0000   20.0000  "
                        "650.50 - -")

    use_phases, avoid_phases, read = read_travel_time_file(filename)
    assert use_phases == ["S", "ScS"]
    assert avoid_phases == ["sS"]
    assert read == informations


def test_empty_phase_lists(tmpdir):
    filename = os.path.join(str(tmpdir), "travelTime.inf")
    info = TravelTimeInformation.from_times("201001010000A", ABC,
                                            {"S": 500.0}, {})
    write_travel_time_file(["S"], [], [info], filename)
    with open(filename, "rt") as fh:
        assert fh.read().splitlines()[3] == "-"
    assert read_travel_time_file(filename) == (["S"], [], {info})


def test_invalid_file(tmpdir):
    filename = os.path.join(str(tmpdir), "travelTime.inf")
    with open(filename, "wt") as fh:
        fh.write("# usePhases...\nS\n# avoidPhases...\n-\n"
                 "201001010000A ABC XX 35.0 135.0 500.0 600.0\n")
    with pytest.raises(PhasewinError):
        read_travel_time_file(filename)

    with open(filename, "wt") as fh:
        fh.write("# usePhases...\nS\n")
    with pytest.raises(PhasewinError):
        read_travel_time_file(filename)
