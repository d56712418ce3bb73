import multiprocessing as mpr
import threading as thr
import time

from bemeval.options import VerbosityLevel

__all__ = ("TicToc", )


class TicToc:
    """Nested wall-clock timer which reports to stdout at high verbosity.

    Start times are kept per process and thread, so that timers nested in
    the same thread are indented according to their depth.
    """
    __t_start = {}

    def __init__(self, title="", verbosity=VerbosityLevel.DEFAULT):
        self.title = title
        self.should_print = VerbosityLevel(verbosity) >= VerbosityLevel.HIGH

    def tic(self, _print=False):
        mp_name = self.mp_name
        times = TicToc.__t_start.setdefault(mp_name, [])

        if _print and self.should_print:
            indent_str = self._get_indent_str(len(times))
            print(f"{indent_str}{mp_name}::[{self.title}]", flush=True)
        times.append(time.time())

    def toc(self) -> float:
        mp_name = self.mp_name
        times = TicToc.__t_start[mp_name]

        t_elapsed = time.time() - times.pop()
        if not times:
            del TicToc.__t_start[mp_name]
        if self.should_print:
            indent_str = self._get_indent_str(len(times))
            print(f"{indent_str}{mp_name}::[{self.title}] complete in {t_elapsed:.3f}s", flush=True)
        return t_elapsed

    @property
    def mp_name(self):
        return f"{mpr.current_process().name}.{thr.current_thread().name}"

    @staticmethod
    def _get_indent_str(level):
        return "--" * level

    def __enter__(self):
        self.tic(_print=True)
        return self

    def __exit__(self, type, value, traceback):
        self.toc()
