"""CPU profiling across every thread of a run"""

import logging
from contextlib import contextmanager

import yappi

logger = logging.getLogger(__name__)


@contextmanager
def cpu_profile(path: str | None):
    """
    Profile CPU time of the main thread and every thread started inside the block.

    Stats are written to path in pstats format, so they load with
    pstats.Stats(path) or snakeviz. A None path disables profiling.

    Args:
        path: Output file, or None
    """
    if path is None:
        yield
        return

    yappi.clear_stats()
    yappi.set_clock_type('cpu')
    yappi.start(builtins=False, profile_threads=True)
    try:
        yield
    finally:
        yappi.stop()
        stats = yappi.get_func_stats()
        stats.save(path, type='pstat')
        logger.debug(f'[PROFILE] {len(stats)} functions written to {path}')
        yappi.clear_stats()
