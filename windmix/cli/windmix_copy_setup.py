#!/usr/bin/env python

import os
import shutil
import functools

import click
import entrypoints

SETUPDIR_ENVVAR = "WINDMIX_SETUP_DIR"
SETUP_DIR_ENTRY_POINT_GROUP = "windmix.setup_dirs"
IGNORE_PATTERNS = ["__init__.py", "*.pyc", "__pycache__"]


def find_setup_dirs():
    """Directories holding setup templates, from installed packages and ``WINDMIX_SETUP_DIR``.

    ``windmix.setups`` itself is registered in the entry point group as well; it
    is always searched first so that it is found without an installed package.
    """
    import windmix.setups

    setup_dirs = [os.path.dirname(windmix.setups.__file__)]

    for entry_point in entrypoints.get_group_all(SETUP_DIR_ENTRY_POINT_GROUP):
        setup_dirs.append(os.path.dirname(entry_point.load().__file__))

    setup_dirs.extend(d for d in os.environ.get(SETUPDIR_ENVVAR, "").split(";") if os.path.isdir(d))

    return list(dict.fromkeys(setup_dirs))


def find_setups(setup_dirs):
    """Maps setup names to template directories. Later directories take precedence."""
    setups = {}
    for setup_dir in setup_dirs:
        for name in sorted(os.listdir(setup_dir)):
            path = os.path.join(setup_dir, name)
            if os.path.isdir(path) and not name.startswith(("_", ".")):
                setups[name] = path
    return setups


SETUPS = find_setups(find_setup_dirs())
SETUP_NAMES = sorted(SETUPS)


def write_version_file(target_dir, origin):
    from windmix import __version__ as windmix_version

    with open(os.path.join(target_dir, "version.txt"), "w") as f:
        f.write(f"windmix v{windmix_version}\n{origin}\n")


def copy_setup(setup, to=None):
    """Copy a standard setup to another directory.

    Available setups:

        {setups}

    Example:

        $ windmix copy-setup wind_mixing --to ~/windmix-setups/strong-wind

    More template directories can be listed (separated by ``;``) in the
    {setup_envvar} environment variable.
    """
    target = to if to is not None else os.path.join(os.getcwd(), setup)

    if os.path.exists(target):
        raise RuntimeError(f"Target directory {target} must not exist")

    os.makedirs(os.path.dirname(os.path.realpath(target)), exist_ok=True)
    shutil.copytree(SETUPS[setup], target, ignore=shutil.ignore_patterns(*IGNORE_PATTERNS))
    write_version_file(target, SETUPS[setup])


copy_setup.__doc__ = copy_setup.__doc__.format(setups=", ".join(SETUP_NAMES), setup_envvar=SETUPDIR_ENVVAR)


@click.command("windmix-copy-setup")
@click.argument("setup", type=click.Choice(SETUP_NAMES), metavar="SETUP")
@click.option(
    "--to",
    default=None,
    type=click.Path(dir_okay=False, file_okay=False, writable=True),
    help="Target directory, must not exist (default: SETUP in the current working directory)",
)
@functools.wraps(copy_setup)
def cli(*args, **kwargs):
    copy_setup(*args, **kwargs)


if __name__ == "__main__":
    cli()
