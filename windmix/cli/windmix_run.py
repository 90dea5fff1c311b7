#!/usr/bin/env python

import functools
import inspect
import os
import sys
import importlib.util

import click

from windmix import runtime_settings, LESSetup, __version__ as windmix_version
from windmix.settings import SETTINGS
from windmix.logs import LOGLEVELS
from windmix.runtime import FLOAT_TYPES

#: Command line options that are forwarded to the runtime settings
RUNTIME_OPTIONS = ("loglevel", "float_type", "diskless_mode", "force_overwrite")


class WindmixSetting(click.ParamType):
    """Parses ``-s NAME VALUE`` pairs, converting VALUE to the type of setting NAME."""

    name = "setting"
    current_key = None

    def convert(self, value, param, ctx):
        assert param.nargs == 2

        # click converts the two values of each pair one after another
        if self.current_key is None:
            if value not in SETTINGS:
                self.fail(f"Unknown setting {value}")
            self.current_key = value
            return value

        setting = SETTINGS[self.current_key]
        self.current_key = None

        if setting.type is bool:
            return click.BOOL(value)

        try:
            return setting.type(value)
        except (TypeError, ValueError) as e:
            self.fail(f"Invalid value {value!r}: {e!s}")


def _import_from_file(path):
    module_name = os.path.splitext(os.path.basename(path))[0]
    spec = importlib.util.spec_from_file_location(module_name, path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def find_setup_class(setup_module):
    """Returns the one concrete LESSetup subclass defined or imported in ``setup_module``."""
    candidates = {
        obj
        for obj in vars(setup_module).values()
        if inspect.isclass(obj) and issubclass(obj, LESSetup) and not inspect.isabstract(obj)
    }

    if not candidates:
        raise RuntimeError(f"No LESSetup subclass found in {setup_module.__file__}")

    if len(candidates) > 1:
        names = ", ".join(sorted(cls.__name__ for cls in candidates))
        raise RuntimeError(f"windmix setups can only define one LESSetup class (found: {names})")

    return candidates.pop()


def run(setup_file, engine, *args, **kwargs):
    """Runs a windmix setup from given file"""
    from windmix import logger

    runtime_settings.update(**{key: kwargs.pop(key) for key in RUNTIME_OPTIONS})
    kwargs["override"] = dict(kwargs["override"])

    setup_module = _import_from_file(setup_file)
    SetupClass = find_setup_class(setup_module)

    setup_version = getattr(setup_module, "__WINDMIX_VERSION__", None)
    if setup_version and setup_version != windmix_version:
        logger.warning(
            "This is windmix v{}, but the given setup was generated with v{}. "
            "Consider switching to this version of windmix or updating your setup file.\n",
            windmix_version,
            setup_version,
        )

    sim = SetupClass(engine, *args, **kwargs)
    sim.setup()
    sim.run()


@click.command("windmix-run")
@click.argument("SETUP_FILE", type=click.Path(readable=True, dir_okay=False, resolve_path=True))
@click.option(
    "-e",
    "--engine",
    required=True,
    envvar="WINDMIX_ENGINE",
    help="LES engine, as module:Class or the name of an installed engine",
)
@click.option(
    "-v",
    "--loglevel",
    default="info",
    type=click.Choice(LOGLEVELS),
    help="Log level used for output",
    show_default=True,
)
@click.option(
    "-s",
    "--override",
    nargs=2,
    multiple=True,
    metavar="SETTING VALUE",
    type=WindmixSetting(),
    default=tuple(),
    help="Override model setting, may be specified multiple times (use None to unset optional settings)",
)
@click.option("--force-overwrite", is_flag=True, help="Silently overwrite existing outputs")
@click.option("--diskless-mode", is_flag=True, help="Supress all output to disk")
@click.option(
    "--float-type",
    default="float64",
    type=click.Choice(FLOAT_TYPES),
    help="Floating point precision of model fields",
    show_default=True,
)
@functools.wraps(run)
def cli(setup_file, *args, **kwargs):
    if not setup_file.endswith(".py"):
        raise click.BadParameter(f"The given setup file {setup_file} does not appear to be a Python file.")

    return run(setup_file, *args, **kwargs)


if __name__ == "__main__":
    cli()
