#!/usr/bin/env python3

from . import config

VALIDATE = config.DEFAULT_VALIDATE

SEGMENTS_FIRST = False

SHORT = False

VERBOSE = False
