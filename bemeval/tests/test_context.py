import pytest
import torch

from bemeval.context import EvaluationContext
from bemeval.options import EvaluationOptions, VerbosityLevel
from bemeval.utils import TicToc, decide_hmat, decide_num_threads


def test_default_context():
    ctx = EvaluationContext()
    assert not ctx.use_hmat()
    assert ctx.num_threads() >= 1
    assert ctx.options == EvaluationOptions()


def test_context_is_snapshot():
    opt = EvaluationOptions()
    opt.set_max_thread_count(2)
    ctx = EvaluationContext(opt)
    opt.switch_to_hmat_mode()
    opt.set_max_thread_count(5)
    assert not ctx.use_hmat()
    assert ctx.num_threads() == 2


def test_context_hmat():
    opt = EvaluationOptions()
    opt.switch_to_hmat_mode()
    assert EvaluationContext(opt).use_hmat()
    assert decide_hmat(opt)
    assert not decide_hmat()


def test_decide_num_threads():
    opt = EvaluationOptions()
    opt.set_max_thread_count(7)
    assert decide_num_threads(opt) == 7
    assert decide_num_threads() >= 1


def test_threads_restores(restore_torch_threads):
    prev = torch.get_num_threads()
    opt = EvaluationOptions()
    opt.set_max_thread_count(1)
    ctx = EvaluationContext(opt)
    with ctx.threads() as c:
        assert c is ctx
        assert torch.get_num_threads() == 1
    assert torch.get_num_threads() == prev


def test_threads_restores_on_error(restore_torch_threads):
    prev = torch.get_num_threads()
    opt = EvaluationOptions()
    opt.set_max_thread_count(1)
    with pytest.raises(RuntimeError):
        with EvaluationContext(opt).threads():
            raise RuntimeError("failure during evaluation")
    assert torch.get_num_threads() == prev


@pytest.mark.parametrize("level,prints", [
    (VerbosityLevel.LOW, False),
    (VerbosityLevel.DEFAULT, False),
    (VerbosityLevel.HIGH, True),
])
def test_timer_verbosity(capsys, level, prints):
    opt = EvaluationOptions()
    opt.set_verbosity_level(level)
    with EvaluationContext(opt).timer("assembly"):
        pass
    out = capsys.readouterr().out
    assert ("[assembly] complete in" in out) == prints


def test_tictoc_nested(capsys):
    with TicToc("outer", verbosity=VerbosityLevel.HIGH):
        with TicToc("inner", verbosity=VerbosityLevel.HIGH) as t:
            assert isinstance(t, TicToc)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert lines[1].startswith("--")
    assert not lines[0].startswith("--")


def test_tictoc_returns_elapsed():
    t = TicToc("x")
    t.tic()
    assert t.toc() >= 0


def test_tictoc_releases_thread_entry():
    t = TicToc("x")
    t.tic()
    t.toc()
    assert t.mp_name not in TicToc._TicToc__t_start
