#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Helpers for embarrassingly parallel calculations.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import collections
import functools
import inspect
import sys
import traceback
import warnings

import joblib


class FunctionInfo(collections.namedtuple(
    "FunctionInfo", ["func_args", "result", "warnings", "exception",
                     "traceback"])):
    """
    Namedtuple used to collect information about a function execution.

    It has the following fields: ``func_args``, ``result``, ``warnings``,
    ``exception``, and ``traceback``.
    """
    pass


def function_info(traceback_limit=10):
    """
    Decorator collecting information during the execution of a function.

    It returns a FunctionInfo named tuple with the following fields:

    * ``func_args``: Dictionary containing all the functions arguments and
      values.
    * ``result``: The return value of the function. Will be None if an
      exception has been raised.
    * ``warnings``: A list with all warnings the function raised.
    * ``exception``: The exception the function raised. Will be None, if no
      exception has been raised.
    * ``traceback``: The full traceback as a string in case an exception
      occurred.

    >>> @function_info()
    ... def test(a, b=2):
    ...     return a // b
    >>> info = test(4, 1)
    >>> info.func_args
    {'a': 4, 'b': 1}
    >>> info.result
    4
    >>> info.warnings
    []
    >>> info.exception
    >>> info.traceback
    """
    def _function_info(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            with warnings.catch_warnings(record=True) as w:
                warnings.simplefilter("always")
                result = None
                exception = None
                tb = None
                func_args = inspect.getcallargs(f, *args, **kwargs)
                try:
                    result = f(*args, **kwargs)
                except Exception as e:
                    exc_info = sys.exc_info()
                    stack = traceback.extract_stack(limit=traceback_limit)
                    tb = traceback.extract_tb(exc_info[2])
                    full_tb = stack[:-1] + tb
                    exc_line = traceback.format_exception_only(*exc_info[:2])
                    tb = "Traceback (%i levels - most recent call last):\n" % \
                        traceback_limit
                    tb += "".join(traceback.format_list(full_tb))
                    tb += "\n"
                    tb += "".join(exc_line)
                    exception = e

            return FunctionInfo(
                func_args=func_args,
                result=result,
                exception=exception,
                warnings=w,
                traceback=tb)

        return wrapper
    return _function_info


def _execute_wrapped_function(func, parameters):
    """
    Executes the function wrapped with the function_info decorator.
    """
    return function_info()(func)(**parameters)


def parallel_map(func, iterable, n_jobs=1, verbose=0,
                 pre_dispatch="2*n_jobs", backend="threading"):
    """
    Thin wrapper around joblib.Parallel wrapping all functions with the
    function_info decorator. Exceptions thus never propagate; they are part
    of the returned FunctionInfo objects.

    :type func: callable
    :param func: The function to execute.
    :param iterable: Dictionaries with the keyword arguments of each call.
    :type n_jobs: int
    :param n_jobs: The number of jobs to use for the computation. If -1 all
        CPUs are used. If 1 is given, no parallel computing code is used at
        all, which is useful for debugging. Same parameter as in
        joblib.Parallel.
    :type verbose: int
    :param verbose: The verbosity level of joblib.
    :param pre_dispatch: The amount of jobs to be pre-dispatched.
    :param backend: The joblib backend. The default threading backend
        requires nothing to be picklable.
    :return: One FunctionInfo per item of the iterable, in the same order.
    """
    return joblib.Parallel(n_jobs=n_jobs, verbose=verbose,
                           pre_dispatch=pre_dispatch, backend=backend)(
        joblib.delayed(_execute_wrapped_function)(func, i) for i in iterable)
