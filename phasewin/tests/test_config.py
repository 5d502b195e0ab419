#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the configuration of the window maker.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import os

import pytest

from phasewin import PhasewinError
from phasewin.config import WindowMakerConfig, write_default_config
from phasewin.timewindow_data import Component


def _write(tmpdir, content):
    filename = os.path.join(str(tmpdir), "config.toml")
    with open(filename, "wt") as fh:
        fh.write(content)
    return filename


def test_default_config(tmpdir):
    filename = os.path.join(str(tmpdir), "config.toml")
    write_default_config(filename)
    config = WindowMakerConfig.from_file(filename)
    assert config == WindowMakerConfig()

    assert config.components == [Component.Z, Component.R, Component.T]
    assert config.use_phases == ["S"]
    assert config.avoid_phases == []
    assert config.avoid_front_shift == 5.0
    assert config.avoid_rear_shift == config.rear_shift
    assert config.first_arrival_only is True
    assert config.split_window is False
    assert config.model == "prem"
    assert config.n_jobs == 1
    assert config.tag == ""

    # Existing files are not overwritten.
    with pytest.raises(PhasewinError):
        write_default_config(filename)


def test_reading_config(tmpdir):
    filename = _write(tmpdir, """
[window_maker]
components = ["T", "BHZ"]
use_phases = ["S", "ScS", "S"]
avoid_phases = ["sS"]
front_shift = 20
rear_shift = 60.0
minimum_length = 10.0
split_window = true
model = "AK135"
n_jobs = -1
tag = "test"
""")
    config = WindowMakerConfig.from_file(filename)
    assert config.components == [Component.Z, Component.T]
    assert config.use_phases == ["S", "ScS"]
    assert config.avoid_phases == ["sS"]
    assert config.front_shift == 20.0
    assert isinstance(config.front_shift, float)
    assert config.rear_shift == 60.0
    # Defaults to the rear shift.
    assert config.avoid_rear_shift == 60.0
    assert config.avoid_front_shift == 5.0
    assert config.split_window is True
    assert config.model == "ak135"
    assert config.n_jobs == -1
    assert config.tag == "test"
    assert "ScS" in str(config)


def test_invalid_configs(tmpdir):
    with pytest.raises(PhasewinError):
        WindowMakerConfig.from_file(os.path.join(str(tmpdir), "missing.toml"))

    invalid = [
        "[something_else]\nfront_shift = 1.0\n",
        "[window_maker]\nunknown_key = 1\n",
        "[window_maker]\nfront_shift = \"a\"\n",
        "[window_maker]\nfront_shift = true\n",
        "[window_maker]\nsplit_window = 1\n",
        "[window_maker]\ncomponents = [\"N\"]\n",
        "[window_maker]\ncomponents = []\n",
        "[window_maker]\nuse_phases = []\n",
        "[window_maker]\nuse_phases = [\"\"]\n",
        "[window_maker]\nuse_phases = [\"S\"]\navoid_phases = [\"S\"]\n",
        "[window_maker]\nminimum_length = -1.0\n",
        "[window_maker]\nn_jobs = 0\n",
        "[window_maker]\nn_jobs = 1.5\n",
        "[window_maker]\nmodel = \"\"\n",
    ]
    for content in invalid:
        filename = _write(tmpdir, content)
        with pytest.raises(PhasewinError):
            WindowMakerConfig.from_file(filename)


def test_explicit_avoid_rear_shift():
    config = WindowMakerConfig(rear_shift=60.0, avoid_rear_shift=10.0)
    assert config.avoid_rear_shift == 10.0
    assert config != WindowMakerConfig(rear_shift=60.0)
