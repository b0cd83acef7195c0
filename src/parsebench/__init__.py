"""parsebench - parse source trees in parallel and report per-file timings"""

from parsebench.__version__ import __version__

__all__ = ['__version__']
