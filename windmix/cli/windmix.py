#!/usr/bin/env python

import click

from windmix import __version__ as windmix_version


@click.group("windmix")
@click.version_option(windmix_version, prog_name="windmix")
def cli():
    """Command line interface for windmix, wind mixing and convection in an ocean LES"""
    pass


if __name__ == "__main__":
    cli()
