#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
The main phasewin console script.

Necessary things are imported at the function level to keep starting the
command line interface fast.

All functions starting with "phasewin_" will automatically be available as
subcommands to the main "phasewin" command. A decorator to determine the
category of a function is provided.

The help for every function can be accessed either via

phasewin help CMD_NAME

or

phasewin CMD_NAME --help

Each function will be passed a parser and args. It is the function author's
responsibility to add any arguments and call

parser.parse_args(args)

when done.

:copyright:
    The phasewin developers, 2026
:license:
    GNU General Public License, Version 3
    (http://www.gnu.org/copyleft/gpl.html)
"""
import argparse
import difflib
import os
import sys
import traceback

import colorama

import phasewin
from phasewin import PhasewinError

FCT_PREFIX = "phasewin_"


# Documentation for the subcommand groups.
COMMAND_GROUP_DOCS = {
    "Window Making": (
        "Functions making time windows for a set of records."
    ),
    "Window Files": (
        "Functions inspecting and combining time window files."
    ),
}


def command_group(group_name):
    """
    Decorator to be able to logically group commands.
    """
    def wrapper(func):
        func.group_name = group_name
        return func
    return wrapper


@command_group("Window Making")
def phasewin_init_config(parser, args):
    """
    Write a configuration file with the default settings.
    """
    parser.add_argument("filename", help="the configuration file to create")
    args = parser.parse_args(args)

    from phasewin.config import write_default_config
    write_default_config(args.filename)
    print("Wrote configuration file '%s'." % args.filename)


@command_group("Window Making")
def phasewin_make_windows(parser, args):
    """
    Make time windows for all records in a work directory.

    The work directory contains one folder of SAC files per event. The
    output files are written to the work directory unless another directory
    is given.
    """
    parser.add_argument("config", help="the configuration file")
    parser.add_argument("work_dir", help="directory with the event folders")
    parser.add_argument("--output_dir", help="directory for the output files")
    parser.add_argument("--debug", action="store_true",
                        help="show debugging messages")
    parser.add_argument("--log_file", help="also write messages to this file")
    args = parser.parse_args(args)

    from phasewin.config import WindowMakerConfig
    from phasewin.tools.colored_logger import ColoredLogger
    from phasewin.window_maker import WindowMaker

    config = WindowMakerConfig.from_file(args.config)
    logger = ColoredLogger(log_filename=args.log_file, debug=args.debug)
    try:
        logger.debug(str(config))
        maker = WindowMaker(config, args.work_dir,
                            output_dir=args.output_dir, logger=logger)
        windows = maker.run()
        logger.info("%i time windows made, %i records rejected." % (
            len(windows), maker.n_invalid))
    finally:
        logger.close()


@command_group("Window Files")
def phasewin_show_windows(parser, args):
    """
    Print the time windows in a binary time window file.
    """
    parser.add_argument("filename", help="the time window file")
    parser.add_argument("--output", help="write them to this text file "
                                         "instead")
    parser.add_argument("--count", action="store_true",
                        help="only print a summary")
    args = parser.parse_args(args)

    from phasewin.timewindow_file import (
        describe_timewindows, read_timewindow_file, timewindows_to_ascii)
    windows = read_timewindow_file(args.filename)
    if args.count:
        print(describe_timewindows(windows))
    elif args.output:
        timewindows_to_ascii(windows, args.output)
        print("Wrote %i time windows to '%s'." % (len(windows), args.output))
    else:
        for window in sorted(windows):
            print(window)


@command_group("Window Files")
def phasewin_merge_windows(parser, args):
    """
    Merge several time window files into one.
    """
    parser.add_argument("output", help="the merged time window file")
    parser.add_argument("inputs", nargs="+", help="the files to merge")
    args = parser.parse_args(args)

    from phasewin.timewindow_file import (merge_timewindow_files,
                                          write_timewindow_file)
    _check_output(args.output)
    windows = merge_timewindow_files(args.inputs)
    write_timewindow_file(windows, args.output)
    print("Wrote %i time windows to '%s'." % (len(windows), args.output))


@command_group("Window Files")
def phasewin_subtract_windows(parser, args):
    """
    Remove the time windows of one file from another file.
    """
    parser.add_argument("original", help="the file to remove windows from")
    parser.add_argument("subtract", help="the windows to remove")
    parser.add_argument("output", help="the resulting time window file")
    args = parser.parse_args(args)

    from phasewin.timewindow_file import (subtract_timewindow_files,
                                          write_timewindow_file)
    _check_output(args.output)
    windows = subtract_timewindow_files(args.original, args.subtract)
    write_timewindow_file(windows, args.output)
    print("Wrote %i time windows to '%s'." % (len(windows), args.output))


@command_group("Window Files")
def phasewin_intersect_windows(parser, args):
    """
    Keep the time windows for event-receiver pairs present in both files.
    """
    parser.add_argument("input1", help="the first time window file")
    parser.add_argument("input2", help="the second time window file")
    parser.add_argument("output1", help="the windows kept from the first "
                                        "file")
    parser.add_argument("output2", help="the windows kept from the second "
                                        "file")
    parser.add_argument("--phase", action="store_true",
                        help="windows must also have the same phases")
    parser.add_argument("--component", action="store_true",
                        help="windows must also have the same component")
    args = parser.parse_args(args)

    from phasewin.timewindow_file import (intersect_timewindow_files,
                                          write_timewindow_file)
    _check_output(args.output1)
    _check_output(args.output2)
    windows_1, windows_2 = intersect_timewindow_files(
        args.input1, args.input2, match_phases=args.phase,
        match_component=args.component)
    write_timewindow_file(windows_1, args.output1)
    write_timewindow_file(windows_2, args.output2)
    print("Wrote %i and %i time windows." % (len(windows_1), len(windows_2)))


def _check_output(filename):
    if os.path.exists(filename):
        raise PhasewinError("File '%s' already exists." % filename)


def _get_cmd_description(fct, extended=False):
    """
    Convenience function to extract the command description from the first
    line of the docstring.

    :param fct: The function.
    :param extended: If set to true, the function will return a formatted
        version of the entire docstring.
    """
    if not fct.__doc__:
        return ""
    if extended:
        lines = fct.__doc__.split("\n")[:]
        stripped_list = [item[4:] for item in lines]
        return "\n".join(stripped_list) + "\n"
    return fct.__doc__.strip().split("\n")[0].strip()


def _print_generic_help(fcts):
    """
    Small helper function printing a generic help message.
    """
    print(79 * "#")
    header = ("{default_style}phasewin - time windows around seismic "
              "{inverted_style}phases{reset_style}  [Version {version}]"
              .format(
                  default_style=colorama.Style.BRIGHT + colorama.Fore.WHITE +
                  colorama.Back.BLACK,
                  inverted_style=colorama.Style.BRIGHT + colorama.Fore.BLACK +
                  colorama.Back.WHITE,
                  reset_style=colorama.Style.RESET_ALL,
                  version=phasewin.__version__))
    print("    " + header)
    print(79 * "#")
    print("\n{cmd}usage: phasewin [--help] COMMAND [ARGS]{reset}\n".format(
        cmd=colorama.Style.BRIGHT + colorama.Fore.RED,
        reset=colorama.Style.RESET_ALL))

    # Functions with no group are placed in the group "Misc".
    fct_groups = {}
    for fct_name, fct in fcts.items():
        group_name = fct.group_name if hasattr(fct, "group_name") else "Misc"
        fct_groups.setdefault(group_name, {})
        fct_groups[group_name][fct_name] = fct

    for group_name in sorted(fct_groups.keys()):
        print("{0:=>25s} Functions".format(" " + group_name))
        if group_name in COMMAND_GROUP_DOCS:
            print("    %s" % COMMAND_GROUP_DOCS[group_name])
        current_fcts = fct_groups[group_name]
        for name in sorted(current_fcts.keys()):
            print("%s  %20s: %s%s%s" % (colorama.Fore.YELLOW, name,
                  colorama.Fore.CYAN,
                  _get_cmd_description(fcts[name]),
                  colorama.Style.RESET_ALL))
    print("\nTo get help for a specific function type")
    print("\tphasewin help FUNCTION  or\n\tphasewin FUNCTION --help")


def _get_argument_parser(fct, extended=False):
    """
    Helper function to create a proper argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="phasewin %s" % fct.__name__.replace(FCT_PREFIX, ""),
        description=_get_cmd_description(fct, extended),
        formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument(
        "--ipdb",
        help="If true, a debugger will be launched upon encountering an "
             "exception. Requires ipdb.",
        action="store_true")
    return parser


def _get_functions():
    """
    Get a list of all CLI functions defined in this file.
    """
    fcts = {fct_name[len(FCT_PREFIX):]: fct for (fct_name, fct) in
            globals().items()
            if fct_name.startswith(FCT_PREFIX) and hasattr(fct, "__call__")}
    return fcts


def main():
    """
    Main entry point for the phasewin command line interface.

    Essentially just dispatches the different commands to the corresponding
    functions. Also provides some convenience functionality like error
    catching and printing the help.
    """
    fcts = _get_functions()
    args = sys.argv[1:]

    if len(args) == 1 and args[0] == "--version":
        print("phasewin version %s" % phasewin.__version__)
        sys.exit(0)

    if not args or args == ["help"] or args == ["--help"]:
        _print_generic_help(fcts)
        sys.exit(0)

    # Use lowercase to increase tolerance.
    fct_name = args[0].lower()

    further_args = args[1:]
    # Map "phasewin help CMD" to "phasewin CMD --help"
    if fct_name == "help":
        if further_args and further_args[0] in fcts:
            fct_name = further_args[0]
            further_args = ["--help"]
        else:
            sys.stderr.write("phasewin: Invalid command. See "
                             "'phasewin --help'.\n")
            sys.exit(1)

    if fct_name not in fcts:
        sys.stderr.write("phasewin: '{fct_name}' is not a phasewin command. "
                         "See 'phasewin --help'.\n".format(fct_name=fct_name))
        # Attempt to fuzzy match commands.
        close_matches = sorted(difflib.get_close_matches(fct_name, fcts.keys(),
                                                         n=4))
        if len(close_matches) == 1:
            sys.stderr.write("\nDid you mean this?\n\t{match}\n".format(
                match=close_matches[0]))
        elif close_matches:
            sys.stderr.write(
                "\nDid you mean one of these?\n    {matches}\n".format(
                    matches="\n    ".join(close_matches)))
        sys.exit(1)

    func = fcts[fct_name]

    if "--help" in further_args:
        parser = _get_argument_parser(func, extended=True)
    else:
        parser = _get_argument_parser(func)

    try:
        func(parser, further_args)
    except PhasewinError as e:
        print(colorama.Fore.YELLOW + ("Error: %s\n" % str(e)) +
              colorama.Style.RESET_ALL)
        sys.exit(1)
    except Exception:
        args = parser.parse_args(further_args)
        # Launch ipdb debugger right at the exception point if desired.
        if args.ipdb:
            import ipdb  # NOQA
            _, _, tb = sys.exc_info()
            traceback.print_exc()
            ipdb.post_mortem(tb)
        else:
            print(colorama.Fore.RED)
            traceback.print_exc()
            print(colorama.Style.RESET_ALL)
        sys.exit(1)
