import copy
from contextlib import contextmanager
from typing import Optional

import torch

from bemeval.options import EvaluationOptions
from bemeval.utils import TicToc, decide_hmat, decide_num_threads

__all__ = ("EvaluationContext", )


class EvaluationContext():
    """Read-only view of the evaluation options used by a single evaluation task.

    The options are copied on construction, so later changes to the original
    :class:`~bemeval.options.EvaluationOptions` object do not affect a task
    which is already running.

    Parameters
    ----------
    options
        The evaluation options. If None, default options are used.
    """

    def __init__(self, options: Optional[EvaluationOptions] = None):
        self._options = copy.deepcopy(options or EvaluationOptions())

    @property
    def options(self) -> EvaluationOptions:
        return self._options

    def use_hmat(self) -> bool:
        return decide_hmat(self._options)

    def num_threads(self) -> int:
        return decide_num_threads(self._options)

    @contextmanager
    def threads(self):
        """Size the torch intra-op thread pool for the duration of the block."""
        prev_threads = torch.get_num_threads()
        torch.set_num_threads(self.num_threads())
        try:
            yield self
        finally:
            torch.set_num_threads(prev_threads)

    def timer(self, title: str) -> TicToc:
        return TicToc(title, verbosity=self._options.verbosity_level())
