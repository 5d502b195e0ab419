#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Travel time calculation with the TauP implementation of ObsPy.

Initializing a :class:`~obspy.taup.TauPyModel` is fairly expensive and an
instance must not be used by several threads at once. Models are thus cached
per thread and a :class:`~TravelTimeCalculator` is meant to be set up once
per event and then used for all receivers of that event.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
from collections import namedtuple
import threading

# Per thread cache of TauPyModel instances, keyed by model name.
_TAUPY_MODEL_CACHE = threading.local()


class PhaseArrival(namedtuple("PhaseArrival", [
        "phase_name", "travel_time", "distance", "purist_distance"])):
    """
    One predicted arrival of a phase.

    ``distance`` is the epicentral distance in degrees the ray travels and
    ``purist_distance`` the same but wrapped to [0, 360). A purist distance
    of 180 degrees or more marks a major arc path.
    """
    __slots__ = ()

    @property
    def is_major_arc(self):
        return self.purist_distance >= 180.0


def get_taupy_model(model):
    """
    Returns the TauPyModel for the current thread.

    :param model: Name of the model, e.g. "prem" or "ak135".
    """
    models = getattr(_TAUPY_MODEL_CACHE, "models", None)
    if models is None:
        models = _TAUPY_MODEL_CACHE.models = {}
    if model not in models:
        from obspy.taup import TauPyModel  # NOQA
        models[model] = TauPyModel(model=model)
    return models[model]


class TravelTimeCalculator(object):
    """
    Calculates the arrivals of a fixed set of phases for one event.

    >>> calc = TravelTimeCalculator("prem")  # doctest: +SKIP
    >>> calc.set_event(depth_in_km=100.0,
    ...                phases=["S", "ScS"])  # doctest: +SKIP
    >>> calc.get_arrivals(distance_in_degree=60.0)  # doctest: +SKIP
    """
    def __init__(self, model="prem"):
        self.model_name = model
        self._model = get_taupy_model(model)
        self.depth_in_km = None
        self.phases = []

    def set_event(self, depth_in_km, phases):
        """
        Sets the source depth and the phases for all following calculations.
        """
        self.depth_in_km = float(depth_in_km)
        self.phases = list(phases)

    def get_arrivals(self, distance_in_degree, phases=None):
        """
        Returns the arrivals sorted by travel time. Phases that do not exist
        at the given distance and depth have no arrival.

        :param distance_in_degree: The epicentral distance in degrees.
        :param phases: Overwrites the phases set with :meth:`set_event`.
        :rtype: list of :class:`~PhaseArrival`
        """
        if self.depth_in_km is None:
            raise ValueError("The event depth has not been set.")
        phases = self.phases if phases is None else list(phases)
        if not phases:
            return []
        arrivals = self._model.get_travel_times(
            source_depth_in_km=self.depth_in_km,
            distance_in_degree=distance_in_degree,
            phase_list=phases)
        arrivals = [PhaseArrival(
            phase_name=_i.name, travel_time=float(_i.time),
            distance=float(_i.distance),
            purist_distance=float(_i.purist_distance))
            for _i in arrivals]
        return sorted(arrivals, key=lambda x: x.travel_time)
