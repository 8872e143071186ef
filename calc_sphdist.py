#!/usr/bin/env python3
#
# Copyright (c) 2017 Aaron LI
# MIT license
#
# Created: 2017-03-02
#
# Change logs:
# 2017-03-06:
#   * Allow to override the reference point from command line
#   * Support any angular output unit via `astropy.units`
#

"""
Calculate the angular distances between the points on a sphere.

The input table is either of 2 columns ``lon lat``, of which the distances
to the reference point are calculated; or of 4 columns
``lon1 lat1 lon2 lat2``, of which the pair-wise distances are calculated.

Sample config file:
------------------------------------------------------------
points = points.txt
reference = 150.0, 2.2
unit = deg
output_unit = arcmin
outfile = sphdist.txt
------------------------------------------------------------
"""

import sys
import argparse
import json
from collections import OrderedDict

import numpy as np
import astropy.units as au
from configobj import ConfigObj

from sphere import angular_distance


config_default = """
## Configuration for `calc_sphdist.py`

# input table of coordinates: 2 columns (lon lat) or
# 4 columns (lon1 lat1 lon2 lat2)
points = points.txt

# reference point (lon, lat) for the 2-column table
#reference = <LON>, <LAT>

# unit of the input coordinates: deg or rad
unit = deg

# unit of the output distances (any angular unit, e.g., arcmin, arcsec)
output_unit = deg

# output table with the distances appended
outfile = sphdist.txt

# output summary in JSON format
outfile_json = sphdist.json
"""

# supported units of the input coordinates
UNITS = ["deg", "rad"]


def calc_distances(data, reference=None, degrees=True):
    """
    Calculate the angular distances for the 2-column (w.r.t. the
    reference point) or 4-column (pair-wise) coordinate table.

    Return:
    * distances: (vector) in the same unit as the input coordinates
    """
    data = np.array(data, dtype=float, ndmin=2)
    if data.size == 0:
        raise ValueError("empty points table")
    ncol = data.shape[1]
    if ncol == 2:
        if reference is None:
            raise ValueError("reference point required for 2-column table")
        lon0, lat0 = reference
        return angular_distance(data[:, 0], data[:, 1], lon0, lat0,
                                degrees=degrees)
    elif ncol == 4:
        return angular_distance(data[:, 0], data[:, 1],
                                data[:, 2], data[:, 3],
                                degrees=degrees)
    else:
        raise ValueError("invalid number of columns: %d" % ncol)


def convert_unit(distances, unit, output_unit):
    """
    Convert the distances from `unit` to the angular `output_unit`.
    """
    unit = au.Unit(unit)
    output_unit = au.Unit(output_unit)
    if not output_unit.is_equivalent(au.rad):
        raise ValueError("invalid output_unit: %s" % output_unit)
    return distances * unit.to(output_unit)


def summarize(distances, unit):
    results = OrderedDict([
        ("n_points", len(distances)),
        ("unit",     str(unit)),
        ("min",      float(np.min(distances))),
        ("max",      float(np.max(distances))),
        ("mean",     float(np.mean(distances))),
        ("median",   float(np.median(distances))),
    ])
    return results


def main():
    parser = argparse.ArgumentParser(
            description="Calculate angular distances between sphere points")
    parser.add_argument("config", nargs="?", default="sphdist.conf",
                        help="config for the angular distances " +
                             "calculation (default: sphdist.conf)")
    parser.add_argument("-r", "--reference", dest="reference", nargs=2,
                        type=float, metavar=("LON", "LAT"),
                        help="reference point (override the config)")
    parser.add_argument("-v", "--verbose", dest="verbose",
                        action="store_true", help="show verbose information")
    args = parser.parse_args()

    config = ConfigObj(config_default.splitlines())
    config_user = ConfigObj(args.config)
    config.merge(config_user)

    unit = config["unit"]
    if unit not in UNITS:
        raise ValueError("invalid unit: %s" % unit)
    output_unit = config["output_unit"]
    if args.reference:
        reference = args.reference
    elif "reference" in config:
        reference = list(map(float, config.as_list("reference")))
    else:
        reference = None

    data = np.loadtxt(config["points"], ndmin=2)
    if data.size == 0:
        raise ValueError("empty points table: %s" % config["points"])
    if args.verbose:
        print("Loaded %d points from: %s" % (len(data), config["points"]),
              file=sys.stderr)
        print("Reference point:", reference, file=sys.stderr)

    distances = calc_distances(data, reference=reference,
                               degrees=(unit == "deg"))
    distances = convert_unit(distances, unit=unit, output_unit=output_unit)

    data_out = np.column_stack([data, distances])
    if data.shape[1] == 2:
        header = "lon[%s]  lat[%s]  " % (unit, unit)
    else:
        header = "lon1[{0}]  lat1[{0}]  lon2[{0}]  lat2[{0}]  ".format(unit)
    header += "distance[%s]" % output_unit
    np.savetxt(config["outfile"], data_out, header=header)
    if args.verbose:
        print("Saved distances to file:", config["outfile"],
              file=sys.stderr)

    results = summarize(distances, unit=output_unit)
    results_json = json.dumps(results, indent=2)
    print(results_json)
    open(config["outfile_json"], "w").write(results_json+"\n")


if __name__ == "__main__":
    main()
