# Copyright (c) 2017 Aaron LI
# MIT license
#
# Created: 2017-02-08
#
# Change logs:
# 2017-03-02:
#   * Add "angular_distance()" based on the vector dot/cross products,
#     which is stable for both nearby and (nearly) antipodal points
#   * Add helpers "polar_to_rect()" and "rect_to_polar()"
#   * Rewrite "central_angle()" on top of "angular_distance()"
#

"""
Spherical utilities.

The angular distance is calculated as

    α = atan2(|r1_vec x r2_vec|, r1_vec * r2_vec)

instead of ``arccos(r1_vec * r2_vec)``, which loses precision when the
two points are (nearly) identical or antipodal.

References
----------
[1] IDL Astronomy User's Library: sphdist.pro, polrec.pro, recpol.pro
    https://idlastro.gsfc.nasa.gov/
[2] Great Circle - Wolfram MathWorld
    http://mathworld.wolfram.com/GreatCircle.html
"""

import numpy as np


def polar_to_rect(radius, angle, degrees=False):
    """
    Convert the polar coordinate (radius, angle) to the rectangular
    coordinate (x, y).

    Parameters
    ----------
    radius : float, or float `~numpy` array
    angle : float, or float `~numpy` array
        (Unit: rad, or deg if ``degrees=True``)
    degrees : bool, optional
        Whether the ``angle`` is given in degrees.

    Returns
    -------
    x, y : float, or float `~numpy` arrays
    """
    if degrees:
        angle = np.deg2rad(angle)
    x = radius * np.cos(angle)
    y = radius * np.sin(angle)
    return (x, y)


def rect_to_polar(x, y, degrees=False):
    """
    Convert the rectangular coordinate (x, y) to the polar coordinate
    (radius, angle), with the angle in range (-π, π].

    The origin (x = y = 0) is given the angle of zero.

    Parameters
    ----------
    x, y : float, or float `~numpy` arrays
    degrees : bool, optional
        Whether to return the ``angle`` in degrees.

    Returns
    -------
    radius : float, or float `~numpy` array
    angle : float, or float `~numpy` array
        (Unit: rad, or deg if ``degrees=True``)
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    radius = np.hypot(x, y)
    angle = np.arctan2(y, x)
    # atan2(±0, -0) gives ±π
    angle = np.where((x == 0) & (y == 0), 0.0, angle)
    angle = np.where(angle == -np.pi, np.pi, angle)
    if degrees:
        angle = np.rad2deg(angle)
    if angle.ndim == 0:
        return (float(radius), float(angle))
    else:
        return (radius, angle)


def _is_array_point(lon, lat, name):
    """
    Check the shapes of the (longitude, latitude) coordinates of a point,
    and tell whether they are arrays (True) or scalars (False).
    """
    ndim_lon, ndim_lat = np.ndim(lon), np.ndim(lat)
    if ndim_lon == 0 and ndim_lat == 0:
        return False
    if ndim_lon == 0 or ndim_lat == 0:
        raise TypeError("%s: cannot mix array and scalar coordinates" % name)
    if ndim_lon > 1 or ndim_lat > 1:
        raise ValueError("%s: coordinates must be 1D arrays" % name)
    if len(lon) != len(lat):
        raise ValueError("%s: different lengths of longitude (%d) and "
                         "latitude (%d)" % (name, len(lon), len(lat)))
    return True


def angular_distance(long1, lat1, long2, lat2, degrees=False):
    """
    Calculate the angular distance between the points on a sphere.

    Parameters
    ----------
    long1, lat1 : float, or 1D float tuple/list/`~numpy` array
        (longitude, latitude) coordinate(s) of point 1
    long2, lat2 : float, or 1D float tuple/list/`~numpy` array
        (longitude, latitude) coordinate(s) of point 2
    degrees : bool, optional
        If ``True``, all the angles, including the output distance, are
        in degrees; otherwise, they are all in radians.  (Default: False)

    Returns
    -------
    distance : float, or 1D float `~numpy` array
        Angular distance(s) in range [0, π] (or [0, 180] deg).
        If both points are given as arrays, the i-th element is the
        distance between the i-th elements of point 1 and point 2;
        if only one point is given as arrays, the i-th element is the
        distance between its i-th element and the other (scalar) point.

    Raises
    ------
    TypeError
        A point has one array and one scalar coordinate.
    ValueError
        The coordinate arrays have different lengths.

    Algorithm
    ---------
    Unit vector:
        r_vec = (cos(λ)*cos(δ), sin(λ)*cos(δ), sin(δ))

    cos(α) ∝ r1_vec * r2_vec
    sin(α) ∝ |r1_vec x r2_vec|
    """
    p1_array = _is_array_point(long1, lat1, name="point 1")
    p2_array = _is_array_point(long2, lat2, name="point 2")
    if p1_array and p2_array and len(long1) != len(long2):
        raise ValueError("different lengths of point 1 (%d) and "
                         "point 2 (%d)" % (len(long1), len(long2)))
    long1, lat1 = np.asarray(long1, float), np.asarray(lat1, float)
    long2, lat2 = np.asarray(long2, float), np.asarray(lat2, float)
    # convert both points to rectangular coordinates
    rxy, z1 = polar_to_rect(1.0, lat1, degrees=degrees)
    x1, y1 = polar_to_rect(rxy, long1, degrees=degrees)
    rxy, z2 = polar_to_rect(1.0, lat2, degrees=degrees)
    x2, y2 = polar_to_rect(rxy, long2, degrees=degrees)
    # dot product
    cs = x1*x2 + y1*y2 + z1*z2
    # cross product
    xc = y1*z2 - z1*y2
    yc = z1*x2 - x1*z2
    zc = x1*y2 - y1*x2
    sn = np.hypot(xc, np.hypot(yc, zc))
    radius, angle = rect_to_polar(cs, sn, degrees=degrees)
    if p1_array or p2_array:
        return np.asarray(angle, dtype=float)
    else:
        return float(angle)


def central_angle(p0, points):
    """
    Calculate the central angle(s) between the points ``p0`` with respect to
    the other point(s) ``points`` on the sphere.
    This is a wrapper of `angular_distance()` with all angles in degrees.

    Parameters
    ----------
    p0 : 2-element float tuple/list
        (longitude/R.A., latitude/Dec.) coordinate of the reference point.
        (Unit: deg)
    points : 2-element float tuple/list, or 2-column float `~numpy` array
        Coordinates of the other point(s)
        (Unit: deg)

    Returns
    -------
    angle : float, or 1D float `~numpy` array
        Calculated central angle(s) (Unit: deg)
    """
    lon0, lat0 = p0
    points = np.asarray(points, dtype=float)
    try:
        lon, lat = points[:, 0], points[:, 1]
    except IndexError:
        lon, lat = points  # single point
    return angular_distance(lon0, lat0, lon, lat, degrees=True)


def testAngularDistance():
    np.testing.assert_almost_equal(
        angular_distance(0, 0, 90, 0, degrees=True), 90.0)
    np.testing.assert_almost_equal(
        angular_distance(0, 0, 180, 0, degrees=True), 180.0)
    np.testing.assert_array_almost_equal(
        angular_distance([0, 90], [0, 0], 0, 90, degrees=True),
        [90.0, 90.0])
    np.testing.assert_array_almost_equal(
        central_angle((0, 90), [[0, 0], [90, 0], [45, 45]]),
        [90.0, 90.0, 45.0])
    print("All tests PASSED!")


if __name__ == "__main__":
    testAngularDistance()
