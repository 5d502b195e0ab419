#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
This file has two purposes:

1. Force OpenBLAS to use single threading. Otherwise it might deadlock when
   events are processed in several threads.
2. Make the shared fixtures available to all tests.
"""
import os
os.environ["OPENBLAS_NUM_THREADS"] = "1"

# Fixtures will be available in the whole module.
from phasewin.tests.testing_helpers import cli, work_dir  # NOQA
