#!/usr/bin/env python3
# Copyright (C) 2024-- The gfakit Development Team
#
# This file is part of gfakit.
#
# gfakit is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# gfakit is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with gfakit.  If not, see <http://www.gnu.org/licenses/>.

import os
from setuptools import find_packages, setup

classes = """
    Development Status :: 3 - Alpha
    License :: OSI Approved :: GNU GPL 3 License
    Topic :: Scientific/Engineering
    Topic :: Scientific/Engineering :: Bio-Informatics
    Programming Language :: Python :: 3 :: Only
    Operating System :: Unix
    Operating System :: POSIX
    Operating System :: MacOS :: MacOS X
"""
classifiers = [s.strip() for s in classes.split("\n") if s]

description = "Library and tool for GFA (Graphical Fragment Assembly) graphs"

long_description = (
    "gfakit parses, validates, edits, and writes GFA files. Besides "
    "keeping track of the references between lines, it can compute "
    "statistics about an assembly graph, merge its linear paths, and "
    "multiply its segments."
)

# We can't just import __version__ from gfakit, because our top-level
# __init__.py imports other modules that depend on packages that probably
# haven't been installed yet at this point in setup.
__version__ = None
here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, "gfakit", "__init__.py"), "r") as fp:
    for line in fp.readlines():
        if line.startswith('__version__ = "'):
            __version__ = line.split('"')[1]
if __version__ is None:
    raise RuntimeError("Couldn't find version string?")

setup(
    name="gfakit",
    version=__version__,
    license="GPL3",
    description=description,
    long_description=long_description,
    author="gfakit Development Team",
    classifiers=classifiers,
    packages=find_packages(),
    package_data={"gfakit": ["tests/input/*.gfa"]},
    include_package_data=True,
    install_requires=[
        "click",
        "numpy",
        "networkx",
    ],
    extras_require={
        "dev": ["pytest", "pytest-cov", "flake8", "black>=22.1.0"]
    },
    entry_points={"console_scripts": ["gfak=gfakit._cli:run_script"]},
    python_requires=">=3.8",
)
