from windmix import runtime_settings

# missing value marker in NetCDF output
FILL_VALUE = -1e18


class Variable:
    """Metadata of one model variable.

    ``dims`` is a tuple of dimension names (or fixed sizes), ``None`` for scalars.
    Without an explicit ``dtype``, arrays use the runtime ``float_type``.
    """

    def __init__(
        self,
        name,
        dims,
        units="",
        long_description="",
        dtype=None,
        time_dependent=True,
        extra_attributes=None,
        initial=None,
    ):
        self.name = name
        self.dims = None if dims is None else tuple(dims)
        self.units = units
        self.long_description = long_description or name
        self.dtype = dtype
        self.time_dependent = time_dependent
        self.extra_attributes = dict(extra_attributes or {})
        self.initial = initial

    def __repr__(self):
        return f"Variable({self.name!r}, dims={self.dims}, units={self.units!r})"


XT, YT, ZT, ZW = ("xt",), ("yt",), ("zt",), ("zw",)
T_HOR = XT + YT
T_GRID = XT + YT + ZT
W_GRID = XT + YT + ZW

# dimension -> setting holding its size, or a function of the settings
DIM_TO_SHAPE_VAR = {
    "xt": "nx",
    "yt": "ny",
    "zt": "nz",
    "zw": lambda settings: settings.nz + 1,
}


def get_shape(dimensions, dims):
    if dims is None:
        return ()

    try:
        return tuple(dim if isinstance(dim, int) else dimensions[dim] for dim in dims)
    except KeyError as e:
        raise ValueError(f"unrecognized dimension {e.args[0]}") from None


def allocate(dimensions, dims, dtype=None, fill=0):
    import numpy as np

    return np.full(get_shape(dimensions, dims), fill, dtype=dtype or runtime_settings.float_type)


def _coordinate(name, dim, axis, description):
    attrs = {"axis": axis}
    if axis == "Z":
        attrs["positive"] = "up"
    return Variable(name, (dim,), "m", description, time_dependent=False, extra_attributes=attrs)


def _spacing(name, dim):
    return Variable(name, (dim,), "m", time_dependent=False)


VARIABLES = {
    # scalars
    "itt": Variable("Current iteration", None, dtype="int32", initial=0),
    "time": Variable("Current time", None, "s", "Model time since start", dtype="float64", initial=0.0),
    "dt": Variable("Time step", None, "s", "Length of the current time step", dtype="float64"),
    # grid
    "xt": _coordinate("Zonal coordinate (T)", "xt", "X", "x position of cell centres"),
    "yt": _coordinate("Meridional coordinate (T)", "yt", "Y", "y position of cell centres"),
    "zt": _coordinate("Vertical coordinate (T)", "zt", "Z", "Height of cell centres, surface at 0"),
    "zw": _coordinate("Vertical coordinate (W)", "zw", "Z", "Height of cell faces, surface at 0"),
    "dxt": _spacing("Zonal grid spacing", "xt"),
    "dyt": _spacing("Meridional grid spacing", "yt"),
    "dzt": _spacing("Vertical grid spacing", "zt"),
    # prognostic fields
    "u": Variable("Zonal velocity", T_GRID, "m/s"),
    "v": Variable("Meridional velocity", T_GRID, "m/s"),
    "w": Variable("Vertical velocity", W_GRID, "m/s"),
    "temp": Variable("Temperature", T_GRID, "deg C", "Conservative temperature"),
    "salt": Variable("Salinity", T_GRID, "psu", "Absolute salinity"),
    "nu_e": Variable("Eddy viscosity", T_GRID, "m^2/s", "Eddy viscosity of the subgrid closure"),
    # boundary conditions, positive fluxes point upwards
    "surface_taux": Variable("Surface zonal momentum flux", T_HOR, "m^2/s^2", "Kinematic flux of u through the surface"),
    "surface_tauy": Variable(
        "Surface meridional momentum flux", T_HOR, "m^2/s^2", "Kinematic flux of v through the surface"
    ),
    "forc_temp_surface": Variable("Surface temperature flux", T_HOR, "m K/s"),
    "forc_salt_surface": Variable("Surface salinity flux", T_HOR, "m psu/s"),
    "temp_grad_bottom": Variable("Bottom temperature gradient", T_HOR, "K/m", "dT/dz imposed at the bottom"),
}
