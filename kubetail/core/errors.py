"""Exceptions raised while resolving and tailing pods"""


class KubeTailError(Exception):
    """Base class for errors that end a run with exit code 1"""
    pass


class OptionError(KubeTailError):
    """Unrecognized or invalid command line option"""
    pass


class ResolutionError(KubeTailError):
    """No pod matched the query in any context"""
    pass


class KubectlError(KubeTailError):
    """A kubectl query failed"""
    pass


class StreamError(KubeTailError):
    """A single log stream failed or its source disappeared"""

    def __init__(self, label: str, returncode: int):
        super().__init__(f"Log stream for {label} ended with exit code {returncode}")
        self.label = label
        self.returncode = returncode
