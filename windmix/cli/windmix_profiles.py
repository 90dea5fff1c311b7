#!/usr/bin/env python

import functools

import click


def show_profiles(snapshot, time_index=-1, plot=None):
    """Prints horizontally averaged profiles of a snapshot file.

    Optionally plots slices and profiles to a file (requires matplotlib).
    """
    from windmix.analysis import load_snapshot, mean_profiles, plot_snapshot

    fields = load_snapshot(snapshot, time_index=time_index)
    profiles = mean_profiles(fields)

    click.echo(f"Mean profiles at t = {fields['time']:.1f}s")
    click.echo(f"{'z (m)':>10} {'T (deg C)':>12} {'S (psu)':>12} {'u (m/s)':>12} {'v (m/s)':>12}")

    for k in reversed(range(fields["zt"].size)):
        click.echo(
            f"{fields['zt'][k]:>10.2f} {profiles['temp'][k]:>12.5f} {profiles['salt'][k]:>12.5f} "
            f"{profiles['u'][k]:>12.4e} {profiles['v'][k]:>12.4e}"
        )

    if plot is not None:
        plot_snapshot(fields, outfile=plot)
        click.echo(f"Plot written to {plot}")


@click.command("windmix-profiles")
@click.argument("SNAPSHOT", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "-t", "--time-index", default=-1, type=click.INT, help="Index of the time step to use", show_default=True
)
@click.option(
    "--plot",
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help="Write a plot of slices and profiles to this file",
)
@functools.wraps(show_profiles)
def cli(*args, **kwargs):
    show_profiles(*args, **kwargs)


if __name__ == "__main__":
    cli()
