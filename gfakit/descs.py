#!/usr/bin/env python3

OUTPUT = "Output GFA file. Will be overwritten if it already exists."

SHORT = "Output all statistics on a single line, as key=value pairs."

VALIDATE = (
    "Validation level: 0 (no checks), 1 (format checks), or 2 (format and "
    "type checks)."
)

SEGMENTS_FIRST = (
    "Require segments to be defined before the lines referring to them."
)

VERBOSE = "Log extra details."
