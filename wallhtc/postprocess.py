#!/usr/bin/env python3
"""Evaluate the wallHeatTransferCoeff function object on the time directories
of a case, like OpenFOAM's postProcess utility does for a function entry."""
import argparse
import os
import sys

from wallhtc.case import Case
from wallhtc.config import Configuration
from wallhtc.exceptions import ConfigurationError, MissingFieldError
from wallhtc.fields import CaseRegistry
from wallhtc.functionobject import WallHeatTransferCoeff
from wallhtc.logfiles import LogFiles, read_all
import wallhtc.visualization as visualization


def create_parser():
    parser = argparse.ArgumentParser(usage='%(prog)s [options]')
    parser.add_argument(
        "--case", "-c",
        help="Case directory (instead of cwd)",
        metavar="<dir>",
        default=os.getcwd()
        )
    parser.add_argument(
        "--func", "-f",
        help="Name of the function entry in system/controlDict",
        metavar="<name>",
        default="wallHeatTransferCoeff1"
        )
    parser.add_argument(
        "--dict",
        help="Read the function entry from this file in the system directory",
        metavar="<file>"
        )
    parser.add_argument(
        "--region",
        help="Mesh region, overrides the region entry of the function",
        metavar="<name>"
        )
    parser.add_argument(
        "--time",
        help="Times to process, comma separated list of times or ranges 'start:end'",
        metavar="<ranges>"
        )
    parser.add_argument(
        "--latestTime",
        help="Only process the latest time",
        action="store_true"
        )
    parser.add_argument(
        "--plot",
        help="Plot the patch statistics of this run into postProcessing",
        action="store_true"
        )
    parser.add_argument(
        "--summary",
        help="Print the patch statistics of this run as a table",
        action="store_true"
        )
    return parser


def run(args):
    case = Case(os.path.abspath(args.case))

    configuration = Configuration.from_dict(case.function_dict(args.func, args.dict))
    region = args.region or configuration.region

    times = case.select_times(args.time, args.latestTime)
    if not times:
        raise ValueError('No times to postprocess')

    polymesh = case.polymesh_dir(times[0], region)
    registry = CaseRegistry(
        case, case.read_mesh(times[0], region), region, time=float(times[0]), time_name=times[0]
        )
    logfiles = LogFiles(case.postprocessing_dir(args.func, region, times[0]))
    function = WallHeatTransferCoeff(
        args.func, configuration, registry, logfiles, case.field_writer(registry, region)
        )

    for time in times:
        print('Time = {}'.format(time))
        registry.set_time(float(time), time)

        # Meshes written to time directories replace the previous topology
        if case.polymesh_dir(time, region) != polymesh:
            polymesh = case.polymesh_dir(time, region)
            function.update_mesh(case.read_mesh(time, region))

        try:
            function.execute()
        except MissingFieldError as error:
            print('Warning: {}. Skipping time {}'.format(error, time))
            continue
        function.write()

    print('End')
    if args.summary and os.path.exists(logfiles.directory):
        print(read_all(logfiles.directory).to_string(index=False))
    if args.plot and os.path.exists(logfiles.directory):
        print("Plotting patch statistics")
        visualization.plot(logfiles.directory)
    return function


def main(argv=None):
    args = create_parser().parse_args(argv)
    try:
        run(args)
    except ConfigurationError as error:
        print('FATAL ERROR: {}'.format(error))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
