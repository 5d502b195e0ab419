#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the colored logger.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import os

from phasewin.tools.colored_logger import ColoredLogger


def test_screen_output(capsys):
    logger = ColoredLogger()
    logger.info("some info")
    logger.warning("a warning")
    logger.error("an error")
    logger.debug("hidden")
    out = capsys.readouterr().out
    assert "INFO: some info" in out
    assert "WARNING: a warning" in out
    assert "ERROR: an error" in out
    assert "hidden" not in out

    logger.set_debug(True)
    logger.debug("shown")
    assert "DEBUG: shown" in capsys.readouterr().out


def test_log_file(tmpdir, capsys):
    filename = os.path.join(str(tmpdir), "log.txt")
    logger = ColoredLogger(log_filename=filename, debug=True)
    try:
        logger.info("first message")
        logger.debug("second message")
        logger.critical("third message")
    finally:
        logger.close()
    # Messages after closing only go to the screen.
    logger.info("fourth message")

    with open(filename, "rt") as fh:
        lines = fh.read().splitlines()
    assert len(lines) == 3
    assert lines[0].endswith("INFO: first message")
    assert lines[1].endswith("DEBUG: second message")
    assert lines[2].endswith("CRITICAL: third message")
    assert "fourth message" in capsys.readouterr().out
