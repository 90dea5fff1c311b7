"""Post-processing of snapshot output."""

import numpy as np

from windmix.io_tools import netcdf as nctools
from windmix.operators import Axis, horizontal_mean
from windmix.diagnostics.profiles import temperature_gradient

SNAPSHOT_FIELDS = ("u", "v", "w", "temp", "salt", "nu_e")
COORDINATES = ("xt", "yt", "zt", "zw")
PROFILE_FIELDS = ("u", "v", "w", "temp", "salt")


def load_snapshot(path, time_index=-1):
    """Reads coordinates and all fields of one snapshot.

    Fields are returned in ``(x, y, z)`` order. Negative time indices count
    from the end of the file.
    """
    with nctools.open_file(path, "r") as ncfile:
        num_times = len(ncfile.variables["Time"])

        if not num_times:
            raise ValueError(f"snapshot file {path} contains no time steps")

        if not -num_times <= time_index < num_times:
            raise IndexError(f"time index {time_index} out of range (file has {num_times} time steps)")

        time_index = time_index % num_times

        data = {}
        for key in COORDINATES:
            data[key] = nctools.read_variable(ncfile, key)

        for key in SNAPSHOT_FIELDS:
            if key in ncfile.variables:
                data[key] = nctools.read_variable(ncfile, key, time_step=time_index)

        data["time"] = float(ncfile.variables["Time"][time_index])

    return data


def mean_profiles(fields):
    """Horizontal means of all fields present in ``fields``, plus the mean temperature gradient.

    Requires ``zt`` in ``fields`` if temperature is present.
    """
    profiles = {}

    for key in PROFILE_FIELDS:
        if key in fields:
            profiles[key] = horizontal_mean(fields[key], Axis.z)

    if "temp" in fields:
        profiles["dtemp_dz"] = temperature_gradient(fields["temp"], fields["zt"])

    return profiles


def plot_snapshot(fields, y_index=0, outfile=None):
    """Plots x-z slices of vertical velocity and temperature next to their mean profiles.

    Needs matplotlib. Returns the created figure, and saves it if ``outfile`` is given.
    """
    import matplotlib.pyplot as plt

    profiles = mean_profiles(fields)
    xt, zt, zw = fields["xt"], fields["zt"], fields["zw"]

    fig, axes = plt.subplots(2, 2, figsize=(10, 8), gridspec_kw=dict(width_ratios=(3, 1)))

    wlim = np.max(np.abs(fields["w"][:, y_index, :])) or 1.0
    w_plot = axes[0, 0].pcolormesh(
        xt, zw, fields["w"][:, y_index, :].T, cmap="RdBu_r", vmin=-wlim, vmax=wlim, shading="nearest"
    )
    fig.colorbar(w_plot, ax=axes[0, 0], label="w (m/s)")
    axes[0, 0].set_title(f"Vertical velocity at t = {fields['time']:.0f}s")

    temp_plot = axes[1, 0].pcolormesh(xt, zt, fields["temp"][:, y_index, :].T, cmap="inferno", shading="nearest")
    fig.colorbar(temp_plot, ax=axes[1, 0], label="T (deg C)")
    axes[1, 0].set_title("Temperature")

    for ax in axes[:, 0]:
        ax.set_xlabel("x (m)")
        ax.set_ylabel("z (m)")

    axes[0, 1].plot(profiles["w"], zw)
    axes[0, 1].set_xlabel("<w> (m/s)")

    axes[1, 1].plot(profiles["temp"], zt)
    axes[1, 1].set_xlabel("<T> (deg C)")

    for ax in axes[:, 1]:
        ax.set_ylim(zw[0], zw[-1])
        ax.yaxis.set_ticklabels([])

    fig.tight_layout()

    if outfile is not None:
        fig.savefig(outfile)

    return fig
