#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Configuration of the time window maker.

The configuration is a TOML file with a single ``[window_maker]`` table.
Use :func:`~write_default_config` to get a commented template.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import os

from phasewin import PhasewinError
from phasewin.timewindow_data import Component

DEFAULT_CONFIG = """\
# Configuration of the time window maker. Times are given in seconds.
[window_maker]
  # Components to make windows for.
  components = ["Z", "R", "T"]

  # Phases to be included in the windows.
  use_phases = ["S"]
  # Phases not to be included in the windows, if any.
  avoid_phases = []

  # Time before the first use phase. 10 means 10 s before the arrival.
  front_shift = 0.0
  # Time after the last use phase. 60 means 60 s after the arrival.
  rear_shift = 0.0
  # Time before and after each avoid phase that is excluded. The time after
  # defaults to rear_shift.
  avoid_front_shift = 5.0
  # avoid_rear_shift = 0.0

  # Windows must be longer than this.
  minimum_length = 0.0

  # If true, make one window per group of overlapping use phases and cut
  # out the avoid phases. If false, make one window spanning all use phases
  # and discard the record if an avoid phase arrives in between.
  split_window = false
  # If true, an avoid phase inside a window keeps the part before and the
  # part after it. Otherwise only the part before it is kept.
  split_at_avoid_phases = false
  # Only use the first arrival of each use phase in case of triplication.
  first_arrival_only = true
  # Whether or not to use major arc phases.
  major_arc = false

  # Model to compute travel times with TauP.
  model = "prem"
  # Number of events processed in parallel.
  n_jobs = 1
  # A tag to include in output file names.
  tag = ""
"""


def write_default_config(filename):
    """
    Writes the default configuration. Refuses to overwrite existing files.
    """
    if os.path.exists(filename):
        raise PhasewinError("File '%s' already exists." % filename)
    with open(filename, "wt") as fh:
        fh.write(DEFAULT_CONFIG)


class WindowMakerConfig(object):
    """
    Validated settings of the time window maker.

    All keyword arguments correspond to the keys of the ``[window_maker]``
    table.
    """
    _float_keys = ["front_shift", "rear_shift", "avoid_front_shift",
                   "avoid_rear_shift", "minimum_length"]
    _bool_keys = ["split_window", "split_at_avoid_phases",
                  "first_arrival_only", "major_arc"]

    def __init__(self, components=("Z", "R", "T"), use_phases=("S",),
                 avoid_phases=(), front_shift=0.0, rear_shift=0.0,
                 avoid_front_shift=5.0, avoid_rear_shift=None,
                 minimum_length=0.0, split_window=False,
                 split_at_avoid_phases=False, first_arrival_only=True,
                 major_arc=False, model="prem", n_jobs=1, tag=""):
        if avoid_rear_shift is None:
            avoid_rear_shift = rear_shift
        values = dict(front_shift=front_shift, rear_shift=rear_shift,
                      avoid_front_shift=avoid_front_shift,
                      avoid_rear_shift=avoid_rear_shift,
                      minimum_length=minimum_length)
        for key in self._float_keys:
            value = values[key]
            if isinstance(value, bool) or \
                    not isinstance(value, (int, float)):
                raise PhasewinError("'%s' must be a number." % key)
            setattr(self, key, float(value))
        if self.minimum_length < 0.0:
            raise PhasewinError("'minimum_length' must not be negative.")

        values = dict(split_window=split_window,
                      split_at_avoid_phases=split_at_avoid_phases,
                      first_arrival_only=first_arrival_only,
                      major_arc=major_arc)
        for key in self._bool_keys:
            if not isinstance(values[key], bool):
                raise PhasewinError("'%s' must be true or false." % key)
            setattr(self, key, values[key])

        try:
            self.components = sorted(set(
                Component.from_string(_i) for _i in components))
        except ValueError as e:
            raise PhasewinError(str(e))
        if not self.components:
            raise PhasewinError("At least one component is required.")

        self.use_phases = self._phase_list("use_phases", use_phases)
        self.avoid_phases = self._phase_list("avoid_phases", avoid_phases)
        if not self.use_phases:
            raise PhasewinError("At least one use phase is required.")
        both = set(self.use_phases).intersection(self.avoid_phases)
        if both:
            raise PhasewinError("Phases %s are both used and avoided." %
                                ", ".join(sorted(both)))

        if not isinstance(model, str) or not model:
            raise PhasewinError("'model' must be a model name.")
        self.model = model.lower()
        if isinstance(n_jobs, bool) or not isinstance(n_jobs, int) or \
                n_jobs == 0:
            raise PhasewinError("'n_jobs' must be a non-zero integer.")
        self.n_jobs = n_jobs
        self.tag = str(tag) if tag else ""

    @staticmethod
    def _phase_list(key, phases):
        if isinstance(phases, str):
            phases = phases.split()
        result = []
        for phase in phases:
            if not isinstance(phase, str) or not phase.strip():
                raise PhasewinError("Invalid phase in '%s': %r" % (
                    key, phase))
            if phase.strip() not in result:
                result.append(phase.strip())
        return result

    @classmethod
    def from_file(cls, filename):
        """
        Reads the ``[window_maker]`` table of a TOML file.
        """
        import toml
        if not os.path.exists(filename):
            raise PhasewinError("File '%s' not found." % filename)
        with open(filename, "r") as fh:
            config_dict = toml.load(fh)
        if "window_maker" not in config_dict:
            raise PhasewinError("No [window_maker] table in '%s'." %
                                filename)
        settings = config_dict["window_maker"]
        unknown = set(settings.keys()).difference(cls._keys())
        if unknown:
            raise PhasewinError("Unknown settings in '%s': %s" % (
                filename, ", ".join(sorted(unknown))))
        return cls(**settings)

    @classmethod
    def _keys(cls):
        return set(cls._float_keys + cls._bool_keys + [
            "components", "use_phases", "avoid_phases", "model", "n_jobs",
            "tag"])

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.__dict__ == other.__dict__

    def __ne__(self, other):
        return not self.__eq__(other)

    def __str__(self):
        return (
            "Time window maker settings\n"
            "\tComponents: {components}\n"
            "\tUse phases: {use}\n"
            "\tAvoid phases: {avoid}\n"
            "\tShifts: front {self.front_shift:.2f}, rear "
            "{self.rear_shift:.2f}, avoid front "
            "{self.avoid_front_shift:.2f}, avoid rear "
            "{self.avoid_rear_shift:.2f}\n"
            "\tMinimum length: {self.minimum_length:.2f}\n"
            "\tSplit window: {self.split_window}\n"
            "\tModel: {self.model}"
        ).format(self=self,
                 components=" ".join(str(_i) for _i in self.components),
                 use=" ".join(self.use_phases),
                 avoid=" ".join(self.avoid_phases) or "-")
