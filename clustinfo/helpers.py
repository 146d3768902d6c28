import gzip
import io
import logging
import os


####################
# HELPER FUNCTIONS #
####################

def setup_logging(name, log_file=None) -> logging.Logger:
    """Set the level of the shared logger to INFO and attach the handlers."""

    logFormatter = logging.Formatter(
        f'%(asctime)s %(levelname)-8s [{name}] %(message)s'
    )
    logger = logging.getLogger('clustinfo')
    logger.setLevel(logging.INFO)

    # Commands may be invoked more than once in the same process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Write to STDERR
    consoleHandler = logging.StreamHandler()
    consoleHandler.setFormatter(logFormatter)
    logger.addHandler(consoleHandler)

    # Write to file
    if log_file is not None:
        fileHandler = logging.FileHandler(log_file)
        fileHandler.setFormatter(logFormatter)
        fileHandler.setLevel(logging.INFO)
        logger.addHandler(fileHandler)

    return logger


def safe_open(fp, mode="rt"):
    if str(fp).endswith(".gz"):
        return gzip.open(fp, mode)
    else:
        return open(fp, mode)


class InputFile:
    """
    Read a (possibly gzip-compressed) text file line by line, while
    keeping track of how much of the file on disk has been consumed.
    """

    def __init__(self, fp):
        self.fp = fp
        self.raw = open(fp, "rb")
        self.size = os.fstat(self.raw.fileno()).st_size
        if str(fp).endswith(".gz"):
            self.handle = gzip.open(self.raw, "rt", encoding="utf-8", newline="\n")
        else:
            self.handle = io.TextIOWrapper(self.raw, encoding="utf-8", newline="\n")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __iter__(self):
        return iter(self.handle)

    def close(self):
        # Closing the gzip reader leaves the underlying file open
        self.handle.close()
        self.raw.close()

    def percent_read(self) -> float:
        if self.size == 0:
            return 100.
        return 100 * self.raw.tell() / self.size


class ProgressReporter:

    def __init__(self, input_file: InputFile, interval: int, label: str):
        self.input_file = input_file
        self.interval = interval
        self.label = label
        self.current = 0

    def increment(self):
        """
        Count one line, logging the progress every `interval` lines.
        """
        self.current += 1
        if self.current % self.interval == 0:
            logging.getLogger('clustinfo').info(
                f"{self.label}: {self.current:,} lines ({self.input_file.percent_read():.1f}%)"
            )
