#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Metadata of the observed records time windows are made for.

Records are SAC files in one folder per event::

    WORK_DIR/
        201001010000A/
            ABC.XX.BHZ.sac
            ABC.XX.BHT.sac
        201002020000B/
            ...

The event id is taken from the ``kevnm`` header and defaults to the name of
the event folder. Times in SAC headers are relative to the event origin.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
from collections import namedtuple
import glob
import os
import warnings

from phasewin import PhasewinError, PhasewinWarning
from phasewin.timewindow_data import Component, Receiver

SAC_EXTENSIONS = ("sac", "SAC")


class RecordInformation(namedtuple("RecordInformation", [
        "name", "receiver", "event", "component", "delta", "end_time",
        "event_depth_in_km", "distance_in_degree"])):
    """
    Everything needed to make time windows for one record.

    ``name`` is the event folder and the file name of the record.
    ``end_time`` is the time of the last sample in seconds after the event
    origin. ``delta`` might be None in which case window times are not
    aligned to samples.
    """
    __slots__ = ()

    def __str__(self):
        return self.name


def _get_header(sac, key, filename):
    value = sac.get(key)
    if value is None:
        raise PhasewinError("SAC header '%s' is not set in '%s'." % (
            key, filename))
    return value


def read_record_information(filename, event=None):
    """
    Reads the metadata of one record from the headers of a SAC file.

    :param filename: The SAC file.
    :param event: The event id. Only used if the file has no ``kevnm``
        header.
    """
    import obspy
    from obspy.geodetics import locations2degrees

    tr = obspy.read(filename, format="SAC", headonly=True)[0]
    sac = tr.stats.sac

    delta = float(tr.stats.delta)
    if "e" in sac:
        end_time = float(sac.e)
    else:
        end_time = float(sac.get("b", 0.0)) + (tr.stats.npts - 1) * delta

    if "gcarc" in sac:
        distance = float(sac.gcarc)
    else:
        distance = locations2degrees(
            float(_get_header(sac, "evla", filename)),
            float(_get_header(sac, "evlo", filename)),
            float(_get_header(sac, "stla", filename)),
            float(_get_header(sac, "stlo", filename)))

    kevnm = str(sac.get("kevnm", "")).strip()
    if kevnm and event and kevnm != event:
        warnings.warn("Event id '%s' of '%s' differs from '%s'. Using '%s'." %
                      (kevnm, filename, event, kevnm), PhasewinWarning)
    event = kevnm or event
    if not event:
        raise PhasewinError("No event id for '%s'." % filename)

    receiver = Receiver(
        station=sac.get("kstnm", tr.stats.station),
        network=sac.get("knetwk", tr.stats.network),
        latitude=_get_header(sac, "stla", filename),
        longitude=_get_header(sac, "stlo", filename))

    if "kcmpnm" in sac:
        component = Component.from_string(sac.kcmpnm)
    else:
        component = Component.from_string(tr.stats.channel)

    name = os.path.join(
        os.path.basename(os.path.dirname(os.path.abspath(filename))),
        os.path.basename(filename))
    return RecordInformation(
        name=name,
        receiver=receiver,
        event=event,
        component=component,
        delta=delta,
        end_time=end_time,
        event_depth_in_km=float(_get_header(sac, "evdp", filename)),
        distance_in_degree=float(distance))


def list_event_folders(work_dir):
    """
    Returns a sorted list of all folders in the work directory that contain
    SAC files.
    """
    folders = []
    for folder in sorted(glob.glob(os.path.join(work_dir, "*"))):
        if os.path.isdir(folder) and list_record_files(folder):
            folders.append(folder)
    return folders


def list_record_files(event_folder):
    """
    Returns a sorted list of the SAC files in an event folder.
    """
    files = set()
    for extension in SAC_EXTENSIONS:
        files.update(glob.glob(os.path.join(event_folder,
                                            "*.%s" % extension)))
    return sorted(files)
