"""NetCDF input and output.

Files follow the COARDS conventions
(http://ferret.pmel.noaa.gov/Ferret/documentation/coards-netcdf-conventions):
dimensions are stored in reverse order, so that arrays indexed as
``(x, y, z)`` in windmix appear as ``(Time, z, y, x)`` on disk, and time
is an unlimited record dimension.
"""

import datetime
import contextlib

import numpy as np

from windmix import (
    logger,
    variables,
    runtime_settings as rs,
    __version__ as windmix_version,
)

TIME_DIMENSION = "Time"


@contextlib.contextmanager
def open_file(filepath, mode):
    from netCDF4 import Dataset

    dataset = Dataset(filepath, mode, format="NETCDF4")
    try:
        yield dataset
    finally:
        dataset.close()


def initialize_file(state, ncfile, extra_dimensions=None, create_time_dimension=True):
    """Writes global attributes, all grid dimensions with their coordinates, and the time axis."""
    from netCDF4 import Dataset

    if not isinstance(ncfile, Dataset):
        raise TypeError(f"expected a netCDF4 Dataset, got {type(ncfile).__name__}")

    ncfile.setncatts(
        dict(
            date_created=datetime.datetime.today().isoformat(),
            windmix_version=windmix_version,
            setup_identifier=state.settings.identifier,
        )
    )

    dimensions = dict(state.dimensions, **(extra_dimensions or {}))

    for dim, size in dimensions.items():
        ncfile.createDimension(dim, int(size))

        if dim in state.var_meta:
            coord, values = state.var_meta[dim], state.variables.get(dim)
        else:
            # index coordinate for dimensions that carry no model variable
            coord, values = variables.Variable(dim, (dim,), time_dependent=False), np.arange(size)

        initialize_variable(state, dim, coord, ncfile)
        write_variable(state, dim, coord, values, ncfile)

    if create_time_dimension:
        ncfile.createDimension(TIME_DIMENSION, None)
        time_var = ncfile.createVariable(TIME_DIMENSION, "f8", (TIME_DIMENSION,))
        time_var.setncatts(dict(long_name="Time", units="seconds", axis="T"))


def _disk_dimensions(var, ncfile):
    dims = tuple(dim for dim in (var.dims or ()) if dim in ncfile.dimensions)

    if var.time_dependent and TIME_DIMENSION in ncfile.dimensions:
        dims += (TIME_DIMENSION,)

    return dims[::-1]


def initialize_variable(state, key, var, ncfile):
    if key in ncfile.variables:
        logger.warning("Variable {} already initialized", key)
        return

    dims = _disk_dimensions(var, ncfile)
    dtype = np.dtype(var.dtype or rs.float_type)

    attrs = dict(long_name=var.name, units=var.units, description=var.long_description)
    attrs.update(var.extra_attributes)

    options = dict(zlib=bool(rs.netcdf_compression and dims))
    if np.issubdtype(dtype, np.floating):
        options["fill_value"] = variables.FILL_VALUE
        attrs["missing_value"] = variables.FILL_VALUE

    ncfile.createVariable(key, dtype, dims, **options).setncatts(attrs)


def advance_time(time_value, ncfile):
    """Appends a record to the time axis and returns its index."""
    time_var = ncfile.variables[TIME_DIMENSION]
    index = len(time_var)
    time_var[index] = time_value
    return index


def write_variable(state, key, var, var_data, ncfile, time_step=None):
    target = ncfile.variables[key]
    data = np.asarray(var_data).T

    if TIME_DIMENSION not in target.dimensions:
        target[...] = data
        return

    if time_step is None:
        raise ValueError(f"variable {key} is time dependent, a time step must be given")

    target[time_step, ...] = data


def read_variable(ncfile, key, time_step=None):
    """Reads a variable back in the (x, y, z) order used by windmix."""
    source = ncfile.variables[key]
    source.set_auto_mask(False)

    if time_step is not None and TIME_DIMENSION in source.dimensions:
        return np.asarray(source[time_step, ...]).T

    return np.asarray(source[...]).T
