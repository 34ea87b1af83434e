import logging
from . import __version__
from .config import SEPBIG, SEPSML, PROGRESS_STEP


def log_lines_with_sep(lines, logfunc, sepchar=SEPSML, endsepline=False):
    # Accounts for the "{HH:MM:SS.mmm} " prefix before each logging message.
    # Note that this is brittle; it will break if the call to
    # logging.basicConfig() in start_log() is changed.
    seplen = len(lines[0]) + 15
    sepline = sepchar * seplen
    out = f"{lines[0]}\n{sepline}"
    if len(lines) > 1:
        linelist = "\n".join(lines[1:])
        out += f"\n{linelist}"
    if endsepline:
        out += f"\n{sepline}"
    logfunc(out)


def start_log(verbose: bool):
    if verbose:
        logging_level = logging.DEBUG
    else:
        logging_level = logging.INFO
    # msecs corresponds to milliseconds, which should be in the range
    # [000, 999]:
    # https://docs.python.org/3/library/logging.html#logrecord-attributes
    logging.basicConfig(
        level=logging_level,
        style="{",
        format="{{{asctime}.{msecs:03.0f}}} {message}",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger(__name__)
    log_lines_with_sep(
        [f"Running gfakit (version {__version__})..."],
        logger.info,
        SEPBIG,
    )


class ProgressLogger(object):
    """Progress observer that reports long operations through logging.

    Instances of this class can be passed as the "progress" argument of
    GfaGraph. The graph calls the observer as
    observer(operation, done, total) after each unit of work; this class
    then logs a message every time another PROGRESS_STEP fraction of the
    operation has been completed (and once more when it's finished).
    """

    def __init__(self, logger=None, step=PROGRESS_STEP):
        if logger is None:
            logger = logging.getLogger(__name__)
        self.logger = logger
        self.step = step
        self._next_report = {}

    def __call__(self, operation, done, total):
        if total <= 0:
            return
        frac = done / total
        if done >= total:
            self.logger.info(f"{operation}: done ({done:,} / {total:,}).")
            self._next_report.pop(operation, None)
            return
        if frac >= self._next_report.get(operation, self.step):
            self.logger.info(
                f"{operation}: {frac * 100:.0f}% ({done:,} / {total:,})..."
            )
            self._next_report[operation] = frac + self.step
