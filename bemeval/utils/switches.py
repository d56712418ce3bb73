from typing import Optional

from bemeval.options import EvaluationMode, EvaluationOptions

__all__ = ("decide_hmat", "decide_num_threads")


def decide_hmat(opt: Optional[EvaluationOptions] = None) -> bool:
    if opt is None:
        opt = EvaluationOptions()
    return opt.evaluation_mode() == EvaluationMode.HMAT


def decide_num_threads(opt: Optional[EvaluationOptions] = None) -> int:
    if opt is None:
        opt = EvaluationOptions()
    return opt.parallelization_options().resolved_thread_count()
