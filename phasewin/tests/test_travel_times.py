#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the travel time calculation. These use the real TauP models of
ObsPy.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import threading

import pytest

from phasewin.travel_times import (PhaseArrival, TravelTimeCalculator,
                                   get_taupy_model)


def test_model_cache():
    assert get_taupy_model("prem") is get_taupy_model("prem")

    models = []
    thread = threading.Thread(
        target=lambda: models.append(get_taupy_model("prem")))
    thread.start()
    thread.join()
    # Each thread has its own model.
    assert models[0] is not get_taupy_model("prem")


def test_arrivals():
    calc = TravelTimeCalculator("prem")
    with pytest.raises(ValueError):
        calc.get_arrivals(60.0)

    calc.set_event(depth_in_km=100.0, phases=["S", "ScS"])
    arrivals = calc.get_arrivals(60.0)
    assert arrivals
    assert all(isinstance(_i, PhaseArrival) for _i in arrivals)
    assert set(_i.phase_name for _i in arrivals) == {"S", "ScS"}
    times = [_i.travel_time for _i in arrivals]
    assert times == sorted(times)

    s = [_i for _i in arrivals if _i.phase_name == "S"][0]
    # Roughly 18 minutes at 60 degrees.
    assert 950.0 < s.travel_time < 1150.0
    assert s.distance == pytest.approx(60.0)
    assert not s.is_major_arc

    # Overwriting the phases.
    arrivals = calc.get_arrivals(60.0, phases=["P"])
    assert set(_i.phase_name for _i in arrivals) == {"P"}
    assert calc.get_arrivals(60.0, phases=[]) == []


def test_phase_without_arrival():
    calc = TravelTimeCalculator("prem")
    calc.set_event(depth_in_km=10.0, phases=["Pdiff"])
    # Pdiff does not exist at short distances.
    assert calc.get_arrivals(20.0) == []


def test_major_arc():
    arrival = PhaseArrival("SS", 2000.0, 200.0, 200.0)
    assert arrival.is_major_arc
    arrival = PhaseArrival("SS", 2000.0, 400.0, 40.0)
    assert not arrival.is_major_arc
