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

# This file contains some utility functions that should help simplify the
# process of creating tests for gfakit.

import os
import tempfile
import pytest
from gfakit import parse_file

INPUT_DIR = os.path.join(os.path.dirname(__file__), "input")


def get_input_path(filename):
    return os.path.join(INPUT_DIR, filename)


def tabify(lines):
    """Converts GFA lines written with spaces between fields to real GFA.

    This makes tests a lot easier to read (and write). Since none of the
    test lines contain spaces within a field, we can just replace every
    space with a tab.
    """
    return [line.replace(" ", "\t") for line in lines]


def run_tempfile_test(file_contents, err_expected, in_err, **kwargs):
    """Writes some lines to a tempfile, and runs parse_file() on it.

    Parameters
    ----------
    file_contents: list of str
        Lines of the tempfile, with fields separated by spaces (see
        tabify()).

    err_expected: None or Exception
        If None, this'll just call parse_file() on the tempfile (with success
        implicitly expected). Otherwise, we'll expect parse_file() to raise
        an error of this type.

    in_err: str
        If err_expected is not None, we assert that this text is contained in
        the corresponding error message.

    **kwargs
        Passed on to parse_file().

    Returns
    -------
    The output of parse_file() (but only if parsing "succeeds").
    """
    filehandle, filename = tempfile.mkstemp(suffix=".gfa")
    output_graph = None
    try:
        with open(filename, "w") as f:
            f.write("\n".join(tabify(file_contents)) + "\n")
        if err_expected is not None:
            with pytest.raises(err_expected) as ei:
                parse_file(filename, **kwargs)
            assert in_err in str(ei.value)
        else:
            output_graph = parse_file(filename, **kwargs)
    finally:
        os.close(filehandle)
        os.unlink(filename)
    return output_graph
