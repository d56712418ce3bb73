from .switches import decide_hmat, decide_num_threads
from .tictoc import TicToc

__all__ = ("TicToc", "decide_hmat", "decide_num_threads")
