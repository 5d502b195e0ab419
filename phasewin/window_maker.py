#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Makes time windows around the predicted arrivals of seismic phases.

Windows are made in two layers. :func:`~make_windows` works on a single
record and its predicted arrivals and does not touch any file. The
:class:`~WindowMaker` drives a whole run: it reads the records of all events
in a work directory, computes travel times, and writes three files:

* ``timewindow[_TAG]_TIMESTAMP.dat``: the binary time window file.
* ``invalidTimewindow[_TAG]_TIMESTAMP.txt``: one line per rejected record,
  ``record : reason``.
* ``travelTime[_TAG]_TIMESTAMP.inf``: the travel times of all phases for
  each event and receiver.

A record is rejected if no use phase arrives, if an avoid phase arrives
between the use phases in the single window mode, or if no window is left
after excluding the avoid phases, cutting the windows to the available data,
and discarding short windows.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
from datetime import datetime
import math
import os
import threading

from phasewin import PhasewinError
from phasewin.records import (list_event_folders, list_record_files,
                              read_record_information)
from phasewin.timewindow import Timewindow, subtract_windows, windows_around
from phasewin.timewindow_data import TimewindowData
from phasewin.timewindow_file import write_timewindow_file
from phasewin.tools.parallel import parallel_map
from phasewin.travel_time_information import (TravelTimeInformation,
                                              write_travel_time_file)
from phasewin.travel_times import TravelTimeCalculator

# Absorbs floating point noise when aligning times to samples, e.g.
# 0.3 / 0.1 = 2.9999999999999996 must be sample 3. In units of samples.
SNAP_TOLERANCE = 1E-9

NO_USE_PHASE = "No use phases arrive"
NOTHING_REMAINS = "Nothing remains after excluding avoid phases"
EXCEEDS_DATA = "Window exceeds available data"
TOO_SHORT = "Shorter than minimum length"


def snap_to_samples(time, delta):
    """
    Moves a time to the preceding sample, i.e. the largest multiple of
    ``delta`` not later than ``time``.

    >>> round(snap_to_samples(10.07, 0.05), 6)
    10.05
    >>> round(snap_to_samples(0.3, 0.1), 6)
    0.3
    """
    return delta * math.floor(time / delta + SNAP_TOLERANCE)


def first_arrivals(arrivals):
    """
    Keeps only the earliest arrival of each phase. The result is sorted by
    travel time.
    """
    earliest = {}
    for arrival in arrivals:
        name = arrival.phase_name
        if name not in earliest or \
                arrival.travel_time < earliest[name].travel_time:
            earliest[name] = arrival
    return sorted(earliest.values(), key=lambda x: x.travel_time)


def collect_arrivals(arrivals, config):
    """
    Sorts arrivals into use and avoid arrivals.

    :param arrivals: The predicted arrivals of the record.
    :type arrivals: list of :class:`~phasewin.travel_times.PhaseArrival`
    :param config: The settings.
    :type config: :class:`~phasewin.config.WindowMakerConfig`
    :return: All use arrivals, the use arrivals windows are made around, and
        the avoid arrivals. Each sorted by travel time.
    """
    use_arrivals = [_i for _i in arrivals
                    if _i.phase_name in config.use_phases]
    if not config.major_arc:
        use_arrivals = [_i for _i in use_arrivals if not _i.is_major_arc]
    use_arrivals = sorted(use_arrivals, key=lambda x: x.travel_time)
    if config.first_arrival_only:
        window_arrivals = first_arrivals(use_arrivals)
    else:
        window_arrivals = list(use_arrivals)
    avoid_arrivals = sorted(
        [_i for _i in arrivals if _i.phase_name in config.avoid_phases],
        key=lambda x: x.travel_time)
    return use_arrivals, window_arrivals, avoid_arrivals


def _make_raw_windows(window_arrivals, avoid_arrivals, config):
    """
    Returns the windows before they are aligned to the data and the reason
    if there are none.
    """
    avoid_windows = windows_around(
        [_i.travel_time for _i in avoid_arrivals],
        config.avoid_front_shift, config.avoid_rear_shift)

    if config.split_window:
        use_windows = windows_around(
            [_i.travel_time for _i in window_arrivals],
            config.front_shift, config.rear_shift)
    else:
        first = window_arrivals[0]
        last = window_arrivals[-1]
        for avoid in avoid_arrivals:
            if first.travel_time <= avoid.travel_time + \
                    config.avoid_rear_shift and \
                    avoid.travel_time - config.avoid_front_shift <= \
                    last.travel_time:
                return [], "%s arrives between %s and %s" % (
                    avoid.phase_name, first.phase_name, last.phase_name)
        use_windows = [Timewindow(first.travel_time - config.front_shift,
                                  last.travel_time + config.rear_shift)]

    windows = subtract_windows(use_windows, avoid_windows,
                               minimum_length=config.minimum_length,
                               split=config.split_at_avoid_phases)
    if not windows:
        return [], NOTHING_REMAINS
    return windows, None


def make_windows(record, arrivals, config):
    """
    Makes the time windows for one record.

    :param record: The record.
    :type record: :class:`~phasewin.records.RecordInformation`
    :param arrivals: All predicted arrivals of the use and avoid phases.
    :type arrivals: list of :class:`~phasewin.travel_times.PhaseArrival`
    :param config: The settings.
    :type config: :class:`~phasewin.config.WindowMakerConfig`
    :return: The windows sorted by start time and the reason why the record
        has been rejected. The reason is None if there are windows.
    """
    use_arrivals, window_arrivals, avoid_arrivals = \
        collect_arrivals(arrivals, config)
    if not window_arrivals:
        return [], NO_USE_PHASE

    windows, reason = _make_raw_windows(window_arrivals, avoid_arrivals,
                                        config)
    if reason:
        return [], reason

    if record.delta:
        windows = [Timewindow(snap_to_samples(_i.start, record.delta),
                              snap_to_samples(_i.end, record.delta))
                   for _i in windows]
    if record.end_time is not None:
        windows = [_i for _i in windows if _i.end <= record.end_time]
        if not windows:
            return [], EXCEEDS_DATA

    windows = [_i for _i in windows if _i.length > config.minimum_length]
    if not windows:
        return [], TOO_SHORT

    # Phases are tagged with all arrivals, not only the first ones.
    return [TimewindowData(
        start=_i.start, end=_i.end, receiver=record.receiver,
        event=record.event, component=record.component,
        phases=set(_j.phase_name for _j in use_arrivals
                   if _i.contains(_j.travel_time)))
        for _i in windows], None


class WindowMaker(object):
    """
    Makes time windows for all records in a work directory.

    >>> from phasewin.config import WindowMakerConfig
    >>> maker = WindowMaker(WindowMakerConfig(),
    ...                     "work_dir")  # doctest: +SKIP
    >>> windows = maker.run()  # doctest: +SKIP

    :param config: The settings.
    :type config: :class:`~phasewin.config.WindowMakerConfig`
    :param work_dir: Directory with one folder of SAC files per event.
    :param output_dir: Directory the output is written to. Defaults to the
        work directory.
    :param logger: A :class:`~phasewin.tools.colored_logger.ColoredLogger`.
    :param calculator_factory: Called with the model name to get the travel
        time calculator of each event.
    """
    def __init__(self, config, work_dir, output_dir=None, logger=None,
                 calculator_factory=TravelTimeCalculator):
        if not os.path.isdir(work_dir):
            raise PhasewinError("'%s' is not a directory." % work_dir)
        self.config = config
        self.work_dir = work_dir
        self.output_dir = output_dir or work_dir
        self.logger = logger
        self.calculator_factory = calculator_factory

        suffix = "%s_%s" % ("_" + config.tag if config.tag else "",
                            datetime.now().strftime("%Y%m%d%H%M%S"))
        self.output_path = os.path.join(
            self.output_dir, "timewindow%s.dat" % suffix)
        self.invalid_path = os.path.join(
            self.output_dir, "invalidTimewindow%s.txt" % suffix)
        self.travel_time_path = os.path.join(
            self.output_dir, "travelTime%s.inf" % suffix)

        self._lock = threading.Lock()
        self.n_invalid = 0

    def _log(self, level, msg):
        if self.logger is None:
            return
        getattr(self.logger, level)(msg)

    def write_invalid(self, record, reason):
        """
        Appends a rejected record to the invalid record log.
        """
        with self._lock:
            with open(self.invalid_path, "at") as fh:
                fh.write("%s : %s\n" % (record, reason))
            self.n_invalid += 1

    @property
    def phases(self):
        return self.config.use_phases + self.config.avoid_phases

    def process_records(self, records, calculator):
        """
        Makes the windows for some records of one event.

        :param records: The records.
        :type records: list of :class:`~phasewin.records.RecordInformation`
        :param calculator: The travel time calculator for the event.
        :return: The windows and the travel time information of the
            records.
        """
        windows = set()
        informations = set()
        arrival_cache = {}
        for record in records:
            if record.component not in self.config.components:
                continue
            if calculator.depth_in_km != record.event_depth_in_km:
                calculator.set_event(record.event_depth_in_km, self.phases)
                arrival_cache = {}
            key = (record.receiver, record.distance_in_degree)
            if key not in arrival_cache:
                arrival_cache[key] = calculator.get_arrivals(
                    record.distance_in_degree)
            arrivals = arrival_cache[key]

            use_arrivals, _, avoid_arrivals = collect_arrivals(
                arrivals, self.config)
            informations.add(TravelTimeInformation(
                record.event, record.receiver, use_arrivals, avoid_arrivals))

            record_windows, reason = make_windows(record, arrivals,
                                                  self.config)
            if reason:
                self._log("debug", "%s : %s" % (record, reason))
                self.write_invalid(record, reason)
                continue
            windows.update(record_windows)
        return windows, informations

    def process_event(self, event_folder):
        """
        Reads the records of one event folder and makes their windows.
        """
        event = os.path.basename(os.path.normpath(event_folder))
        records = [read_record_information(_i, event=event)
                   for _i in list_record_files(event_folder)]
        self._log("debug", "Processing %i records of event %s." % (
            len(records), event))
        if not records:
            return set(), set()
        calculator = self.calculator_factory(self.config.model)
        return self.process_records(records, calculator)

    def run(self):
        """
        Processes all events and writes the output files.

        :return: The windows.
        :rtype: set of :class:`~phasewin.timewindow_data.TimewindowData`
        """
        event_folders = list_event_folders(self.work_dir)
        if not event_folders:
            raise PhasewinError("No event folders with SAC files in '%s'." %
                                self.work_dir)
        self._log("info", "Making time windows for %i events." %
                  len(event_folders))

        results = parallel_map(
            self.process_event,
            [{"event_folder": _i} for _i in event_folders],
            n_jobs=self.config.n_jobs)

        failed = [_i for _i in results if _i.exception is not None]
        if failed:
            for info in failed:
                self._log("error", "Failed to process '%s':\n%s" % (
                    info.func_args["event_folder"], info.traceback))
            raise failed[0].exception

        windows = set()
        informations = set()
        for info in results:
            for w in info.warnings:
                self._log("warning", str(w.message))
            windows.update(info.result[0])
            informations.update(info.result[1])

        if windows:
            write_timewindow_file(windows, self.output_path)
            self._log("info", "Wrote %i time windows to '%s'." % (
                len(windows), self.output_path))
        else:
            self._log("warning", "No time windows have been made.")
        if informations:
            write_travel_time_file(self.config.use_phases,
                                   self.config.avoid_phases, informations,
                                   self.travel_time_path)
            self._log("info", "Wrote travel times to '%s'." %
                      self.travel_time_path)
        if self.n_invalid:
            self._log("warning", "%i records have been rejected. See '%s'." %
                      (self.n_invalid, self.invalid_path))
        return windows
