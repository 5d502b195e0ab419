#!/usr/bin/env python
# -*- coding: utf-8 -*-
__version__ = "0.1.0"


class PhasewinError(Exception):
    """
    Base exception class for phasewin.
    """
    pass


class InvalidIntervalError(PhasewinError, ValueError):
    """
    Raised when a time window would end before it starts.
    """
    pass


class CorruptFileError(PhasewinError):
    """
    Raised when a binary time window file cannot be decoded.
    """
    pass


class EmptyCollectionError(PhasewinError):
    """
    Raised when an empty set of time windows is to be written.
    """
    pass


class PhasewinWarning(UserWarning):
    """
    Base warning class for phasewin.
    """
    pass
