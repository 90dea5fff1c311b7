#!/usr/bin/env python
# coding=utf-8

from setuptools import setup, find_packages

from codecs import open
import os
import re

here = os.path.abspath(os.path.dirname(__file__))


CLASSIFIERS = """
Development Status :: 3 - Alpha
Intended Audience :: Science/Research
License :: OSI Approved :: MIT License
Programming Language :: Python :: 3
Programming Language :: Python :: 3.10
Programming Language :: Python :: 3.11
Programming Language :: Python :: 3.12
Programming Language :: Python :: Implementation :: CPython
Topic :: Scientific/Engineering
Operating System :: POSIX
Operating System :: Unix
Operating System :: MacOS
"""

MINIMUM_VERSIONS = {
    "numpy": "1.20",
    "loguru": "0.6",
    "click": "8.0",
    "entrypoints": "0.3",
}


CONSOLE_SCRIPTS = [
    "windmix = windmix.cli.windmix:cli",
    "windmix-run = windmix.cli.windmix_run:cli",
    "windmix-copy-setup = windmix.cli.windmix_copy_setup:cli",
    "windmix-profiles = windmix.cli.windmix_profiles:cli",
]

with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()


def get_version():
    with open(os.path.join(here, "windmix", "_version.py"), encoding="utf-8") as f:
        return re.search(r'^version = "(.*?)"', f.read(), re.M).group(1)


def parse_requirements(reqfile):
    """Reads a pip requirements file and adds the lower bounds from MINIMUM_VERSIONS."""
    with open(os.path.join(here, reqfile), encoding="utf-8") as f:
        lines = [line.strip() for line in f]

    requirements = []
    for line in lines:
        if not line or line.startswith("#"):
            continue

        pkg, spec, marker = re.match(r"([\w.-]+)([^;]*)(;.*)?$", line).groups()
        bounds = [b for b in (spec.strip(), f">={MINIMUM_VERSIONS[pkg]}" if pkg in MINIMUM_VERSIONS else "") if b]
        requirements.append(pkg + ",".join(bounds) + (marker or ""))

    return requirements


INSTALL_REQUIRES = parse_requirements("requirements.txt")

EXTRAS_REQUIRE = {
    "test": ["pytest", "pytest-cov", "xarray", "matplotlib"],
    "plot": ["matplotlib"],
}


setup(
    name="windmix",
    license="MIT",
    keywords="oceanography python large-eddy-simulation wind-mixing convection boundary-layer",
    description="Wind mixing and convection in an ocean large-eddy simulation.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    version=get_version(),
    packages=find_packages(include=["windmix", "windmix.*"]),
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    entry_points={"console_scripts": CONSOLE_SCRIPTS, "windmix.setup_dirs": ["base = windmix.setups"]},
    classifiers=[c for c in CLASSIFIERS.split("\n") if c],
    zip_safe=False,
)
