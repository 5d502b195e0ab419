#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Simple colorful logging helper that prints to a file and the screen.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import colorama
from datetime import datetime
import logging

LOGGER_NAME = "phasewin"


class ColoredLogger(object):
    """
    Logging class printing to the screen in color and, if a filename is
    given, to a log file.

    Messages of the ``debug`` level are only shown if debugging is enabled.
    """
    def __init__(self, log_filename=None, debug=False):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.has_file = bool(log_filename)
        if self.has_file:
            handler = logging.FileHandler(log_filename)
            handler.setFormatter(logging.Formatter(
                "[%(asctime)-15s] %(levelname)s: %(message)s"))
            self.logger.addHandler(handler)
            self._handler = handler
        else:
            self._handler = None
        self.set_debug(debug)

    def set_debug(self, value):
        if value:
            self._debug = True
            self.logger.setLevel(logging.DEBUG)
        else:
            self._debug = False
            self.logger.setLevel(logging.INFO)

    def close(self):
        """
        Detaches and closes the log file, if any.
        """
        if self._handler is None:
            return
        self.logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
        self.has_file = False

    def critical(self, msg):
        print(colorama.Fore.WHITE + colorama.Back.RED +
              self._format_message("CRITICAL", msg) + colorama.Style.RESET_ALL)
        if not self.has_file:
            return
        self.logger.critical(msg)

    def error(self, msg):
        print(colorama.Fore.RED + self._format_message("ERROR", msg) +
              colorama.Style.RESET_ALL)
        if not self.has_file:
            return
        self.logger.error(msg)

    def warning(self, msg):
        print(colorama.Fore.YELLOW + self._format_message("WARNING", msg) +
              colorama.Style.RESET_ALL)
        if not self.has_file:
            return
        self.logger.warning(msg)

    def info(self, msg):
        print(self._format_message("INFO", msg))
        if not self.has_file:
            return
        self.logger.info(msg)

    def debug(self, msg):
        if not self._debug:
            return
        print(colorama.Fore.BLUE + self._format_message("DEBUG", msg) +
              colorama.Style.RESET_ALL)
        if not self.has_file:
            return
        self.logger.debug(msg)

    def _format_message(self, prefix, msg):
        return "[%s] %s: %s" % (datetime.now(), prefix, msg)
