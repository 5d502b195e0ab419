#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
phasewin

Time windows around the predicted arrivals of seismic phases and the binary
files they are stored in.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import inspect
import os
import re
from setuptools import setup, find_packages


def get_version():
    """
    Reads the version string without importing the package.
    """
    filename = os.path.join(os.path.dirname(os.path.abspath(
        inspect.getfile(inspect.currentframe()))), "phasewin", "__init__.py")
    with open(filename, "rt") as fh:
        match = re.search(r'^__version__ = "(.*)"$', fh.read(), re.MULTILINE)
    return match.group(1)


setup_config = dict(
    name="phasewin",
    version=get_version(),
    description="Time windows around the arrivals of seismic phases",
    author="The phasewin developers",
    packages=find_packages(),
    license="GNU General Public License, version 3 (GPLv3)",
    platforms="OS Independent",
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: Physics'],
    python_requires=">=3.6",
    install_requires=[
        "obspy>=1.0.3",
        "numpy",
        "toml",
        "colorama",
        "joblib"],
    extras_require={
        "test": ["pytest", "mock"]},
    entry_points={
        "console_scripts": [
            "phasewin = phasewin.scripts.phasewin_cli:main",
        ]
    }
)


if __name__ == "__main__":
    setup(**setup_config)
