from collections import namedtuple

Setting = namedtuple("setting", ("default", "type", "description"))


def optional(type_):
    """Like ``type_``, but passes ``None`` (or the string "none", from the command line) through."""

    def wrapped(arg):
        if arg is None or (isinstance(arg, str) and arg.strip().lower() == "none"):
            return None

        return type_(arg)

    return wrapped


SETTINGS = {
    "identifier": Setting("UNNAMED", str, "Identifier of the current simulation"),
    # Grid
    "nx": Setting(0, int, "Grid points in x direction"),
    "ny": Setting(0, int, "Grid points in y direction"),
    "nz": Setting(0, int, "Grid points in vertical (z) direction"),
    "Lx": Setting(0.0, float, "Domain extent in x direction in m"),
    "Ly": Setting(0.0, float, "Domain extent in y direction in m"),
    "Lz": Setting(0.0, float, "Domain depth in m (z ranges from -Lz to 0)"),
    # Time stepping
    "dt": Setting(10.0, float, "Initial time step in s"),
    "stop_time": Setting(0.0, float, "Length of simulation in s"),
    "cfl": Setting(1.0, float, "Target advective CFL number of the time step wizard"),
    "max_change": Setting(1.1, float, "Maximum factor by which the time step may grow per update"),
    "min_change": Setting(0.5, float, "Minimum factor by which the time step may shrink per update"),
    "max_dt": Setting(60.0, float, "Upper bound for the time step in s"),
    "min_dt": Setting(0.0, float, "Lower bound for the time step in s"),
    "wizard_interval": Setting(10, int, "Iterations between two updates of the time step"),
    "progress_interval": Setting(10, int, "Iterations between two progress messages"),
    # Physical constants
    "rho_0": Setting(1026.0, float, "Reference density of seawater in :math:`kg/m^3`"),
    "cp": Setting(3991.0, float, "Heat capacity of seawater in :math:`J/(kg K)`"),
    "grav": Setting(9.80665, float, "Gravitational acceleration in :math:`m/s^2`"),
    "alpha": Setting(2e-4, float, "Thermal expansion coefficient in 1/K"),
    "beta": Setting(8e-4, float, "Haline contraction coefficient in 1/psu"),
    "coriolis": Setting(1e-4, float, "Coriolis parameter of the f-plane in 1/s"),
    # Surface forcing
    "heat_flux": Setting(200.0, float, "Surface heat flux in :math:`W/m^2` (positive means cooling)"),
    "temp_gradient": Setting(0.01, float, "Initial and bottom temperature gradient in K/m"),
    "u10": Setting(10.0, float, "Wind speed 10 m above the ocean in m/s"),
    "c_drag": Setting(2.5e-3, float, "Dimensionless drag coefficient"),
    "rho_air": Setting(1.225, float, "Density of air in :math:`kg/m^3`"),
    "evaporation_rate": Setting(1e-3 / 3600.0, float, "Evaporation rate in m/s"),
    # Initial conditions
    "surface_temp": Setting(20.0, float, "Initial surface temperature in deg C"),
    "salinity": Setting(35.0, float, "Initial salinity in psu"),
    "temp_noise": Setting(1e-6, float, "Relative amplitude of initial temperature noise"),
    "velocity_noise": Setting(1e-3, float, "Relative amplitude of initial velocity noise"),
    "seed": Setting(None, optional(int), "Random seed for initial noise (random if not given)"),
}


def check_setting_conflicts(settings):
    for dim in ("nx", "ny", "nz"):
        if getattr(settings, dim) <= 0:
            raise RuntimeError(f"number of grid points {dim} must be positive")

    if settings.nz < 2:
        raise RuntimeError("nz must be at least 2 (mean profiles need an interior cell face)")

    for extent in ("Lx", "Ly", "Lz"):
        if getattr(settings, extent) <= 0:
            raise RuntimeError(f"domain extent {extent} must be positive")

    if settings.stop_time <= 0:
        raise RuntimeError("stop_time must be positive")

    if settings.dt <= 0:
        raise RuntimeError("initial time step dt must be positive")

    if settings.cfl <= 0:
        raise RuntimeError("target CFL number must be positive")

    if settings.max_change < 1:
        raise RuntimeError("max_change must be at least 1")

    if settings.min_change > 1:
        raise RuntimeError("min_change must not exceed 1")

    if settings.max_dt < settings.min_dt:
        raise RuntimeError("max_dt must not be smaller than min_dt")
