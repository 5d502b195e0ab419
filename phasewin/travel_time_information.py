#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Travel times of the use and avoid phases for event-receiver pairs and the
text file they are reported in.

The file looks like this::

    # usePhases...
    S ScS
    # avoidPhases...
    -
    # eventID station network latitude longitude travelTimes...
    201001010000A   ABC   XX   35.0000  135.0000  500.00  -

A "-" denotes an empty phase list or a phase without arrival.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
from phasewin import PhasewinError
from phasewin.timewindow import DECIMALS, TYPICAL_MAX_INTEGER_DIGITS
from phasewin.timewindow_data import Receiver

# Number of columns at the start of each line identifying event and receiver.
N_ENTRY_TAG = 1 + 4


def fastest_arrivals(arrivals):
    """
    Maps each phase name to its smallest travel time.

    :param arrivals: Iterable of :class:`~phasewin.travel_times.PhaseArrival`
        or of (phase name, travel time) tuples.
    """
    times = {}
    for arrival in arrivals:
        name, time = arrival[0], float(arrival[1])
        if name in times and times[name] < time:
            continue
        times[name] = time
    return times


class TravelTimeInformation(object):
    """
    Travel times of a set of phases for one event-receiver pair.

    If a phase arrives several times, only the fastest arrival is kept.
    """
    def __init__(self, event, receiver, use_arrivals=(), avoid_arrivals=()):
        self.event = event
        self.receiver = receiver
        self._use_phase_times = fastest_arrivals(use_arrivals)
        self._avoid_phase_times = fastest_arrivals(avoid_arrivals)

    @classmethod
    def from_times(cls, event, receiver, use_phase_times, avoid_phase_times):
        return cls(event, receiver, list(use_phase_times.items()),
                   list(avoid_phase_times.items()))

    @property
    def use_phase_times(self):
        return dict(self._use_phase_times)

    @property
    def avoid_phase_times(self):
        return dict(self._avoid_phase_times)

    def time_of(self, phase):
        """
        Travel time of a phase or None if it does not arrive.
        """
        if phase in self._use_phase_times:
            return self._use_phase_times[phase]
        return self._avoid_phase_times.get(phase)

    def _key(self):
        return (self.event, self.receiver)

    def __eq__(self, other):
        if not isinstance(other, TravelTimeInformation):
            return False
        return self._key() == other._key() and \
            self._use_phase_times == other._use_phase_times and \
            self._avoid_phase_times == other._avoid_phase_times

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return "Travel times for %s at %s: %s" % (
            self.event, self.receiver.id, ", ".join(
                "%s %.2f" % (_i, _j) for _i, _j in sorted(
                    list(self._use_phase_times.items()) +
                    list(self._avoid_phase_times.items()),
                    key=lambda x: x[1])))


def _format_time(value):
    if value is None:
        return "-"
    return "%*.*f" % (TYPICAL_MAX_INTEGER_DIGITS + DECIMALS + 1, DECIMALS,
                      value)


def write_travel_time_file(use_phases, avoid_phases, informations,
                           filename):
    """
    Writes the travel times of all event-receiver pairs.

    :param use_phases: Phases used in the windows, defines the columns.
    :param avoid_phases: Phases avoided in the windows, defines the columns.
    :param informations: Iterable of :class:`~TravelTimeInformation`.
    :param filename: The output filename.
    """
    use_phases = list(use_phases)
    avoid_phases = list(avoid_phases)
    informations = sorted(informations, key=lambda x: x._key())

    with open(filename, "wt") as fh:
        fh.write("# usePhases...\n")
        fh.write("%s\n" % (" ".join(use_phases) if use_phases else "-"))
        fh.write("# avoidPhases...\n")
        fh.write("%s\n" % (" ".join(avoid_phases) if avoid_phases else "-"))
        fh.write("# eventID station network latitude longitude "
                 "travelTimes...\n")
        for info in informations:
            times = [_format_time(info.time_of(_i))
                     for _i in use_phases + avoid_phases]
            fh.write("%-15s %s %s\n" % (
                info.event, info.receiver.to_padded_string(),
                " ".join(times)))


def read_travel_time_file(filename):
    """
    Reads a file written by :func:`~write_travel_time_file`.

    :return: The use phases, the avoid phases, and the set of
        :class:`~TravelTimeInformation` objects.
    """
    with open(filename, "rt") as fh:
        lines = [_i.strip() for _i in fh]
    lines = [_i for _i in lines if _i and not _i.startswith("#")]
    if len(lines) < 2:
        raise PhasewinError("'%s' is not a travel time file." % filename)

    use_phases = [] if lines[0] == "-" else lines[0].split()
    avoid_phases = [] if lines[1] == "-" else lines[1].split()

    informations = set()
    for line in lines[2:]:
        parts = line.split()
        if len(parts) != N_ENTRY_TAG + len(use_phases) + len(avoid_phases):
            raise PhasewinError("Illegal line in '%s': %s" % (filename, line))
        receiver = Receiver(parts[1], parts[2], float(parts[3]),
                            float(parts[4]))
        values = parts[N_ENTRY_TAG:]
        use_times = {
            _i: float(_j) for _i, _j in zip(use_phases, values)
            if _j != "-"}
        avoid_times = {
            _i: float(_j) for _i, _j in zip(
                avoid_phases, values[len(use_phases):])
            if _j != "-"}
        informations.add(TravelTimeInformation.from_times(
            parts[0], receiver, use_times, avoid_times))
    return use_phases, avoid_phases, informations
