import copy
import numbers
import warnings
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

import psutil

__all__ = ("AUTO", "EvaluationMode", "VerbosityLevel", "ParallelizationOptions",
           "EvaluationOptions")

AUTO = -1

_docs = {
    "parallelization":
    """
max_thread_count (default AUTO)
    The maximum number of threads used during evaluation of potentials. Must be a positive
    integer or `AUTO` (-1), in which case the number of threads is determined automatically
    from the number of logical CPUs available on the machine.
    """,
    "evaluation":
    """
parameters (default None)
    An optional parameter list (a :class:`bemeval.parameters.ParameterList` or a plain
    mapping) from which the evaluation mode, the maximum thread count and the verbosity
    level are read. Keys which are not recognized are ignored, and missing keys keep their
    default value. A copy of the parameter list is retained and can be inspected through
    :meth:`EvaluationOptions.parameter_list`.
    """,
}


class EvaluationMode(str, Enum):
    """Strategy used to evaluate a potential operator.

    DENSE
        Assemble dense matrices. Potentials are evaluated by direct quadrature
        of their defining integral, or by multiplication with a dense matrix
        representation of the potential operator.
    HMAT
        Assemble hierarchical (tree-structured, compressed) matrices.
    """
    DENSE = "dense"
    HMAT = "hmat"

    @classmethod
    def parse(cls, value) -> "EvaluationMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(
            f"Evaluation mode '{value}' is not valid. "
            f"Valid modes are {', '.join(m.value for m in cls)}.")


class VerbosityLevel(IntEnum):
    """Amount of diagnostic information printed out during evaluation."""
    LOW = -5
    DEFAULT = 0
    HIGH = 5

    @classmethod
    def parse(cls, value) -> "VerbosityLevel":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        elif isinstance(value, numbers.Integral) and not isinstance(value, bool):
            try:
                return cls(int(value))
            except ValueError:
                pass
        raise ValueError(
            f"Verbosity level '{value}' is not valid. "
            f"Valid levels are {', '.join(v.name.lower() for v in cls)}.")


def _check_thread_count(max_thread_count) -> int:
    if isinstance(max_thread_count, str) and max_thread_count.strip().lower() == "auto":
        return AUTO
    if isinstance(max_thread_count, bool) or not isinstance(max_thread_count, numbers.Integral):
        raise ValueError(
            "Maximum thread count must be a positive integer or AUTO, "
            "got %r" % (max_thread_count, ))
    max_thread_count = int(max_thread_count)
    if max_thread_count <= 0 and max_thread_count != AUTO:
        raise ValueError(
            "Maximum thread count must be a positive integer or AUTO, "
            "got %d" % (max_thread_count))
    return max_thread_count


@dataclass
class ParallelizationOptions():
    """Options controlling parallel execution of the evaluation routines
    """
    max_thread_count: int = AUTO

    def set_max_thread_count(self, max_thread_count: int):
        self.max_thread_count = max_thread_count

    @property
    def is_automatic(self) -> bool:
        return self.max_thread_count == AUTO

    def resolved_thread_count(self) -> int:
        """The number of threads the evaluation engine should actually use."""
        if self.is_automatic:
            return psutil.cpu_count(logical=True) or 1
        return self.max_thread_count


class EvaluationOptions():
    """Options controlling evaluation of potentials.

    The evaluation mode, parallelization options and verbosity level are independent:
    changing one of them never affects the others. Instances are plain mutable records,
    and are not safe for concurrent modification. Consumers which need a stable view
    should take a copy (see :class:`bemeval.context.EvaluationContext`).
    """

    def __init__(self, parameters=None):
        self._mode = EvaluationMode.DENSE
        self._parallelization = ParallelizationOptions()
        self._verbosity = VerbosityLevel.DEFAULT
        self._parameter_list = None

        if parameters is not None:
            from bemeval.parameters import ParameterList, EvaluationParameters
            plist = ParameterList.wrap(parameters).copy()
            params = EvaluationParameters.from_parameter_list(plist)
            if params.mode is not None:
                self._mode = params.mode
            if params.max_thread_count is not None:
                self.set_max_thread_count(params.max_thread_count)
            if params.verbosity_level is not None:
                self._verbosity = params.verbosity_level
            self._parameter_list = plist

    # Evaluation mode

    def switch_to_dense_mode(self):
        """Use dense-matrix representations of elementary potential operators.

        This is the default evaluation mode. Potentials due to a single charge distribution
        are evaluated by numerical quadrature of their defining integral, with kernel values
        computed once for each pair of evaluation and quadrature points and then discarded.
        When potentials due to multiple charge distributions are needed at a fixed set of
        points, a dense matrix representation of the potential operator is assembled instead.
        """
        self._mode = EvaluationMode.DENSE

    def switch_to_hmat_mode(self):
        """Use hierarchical-matrix representations of elementary potential operators."""
        self._mode = EvaluationMode.HMAT

    def evaluation_mode(self) -> EvaluationMode:
        return self._mode

    # Parallelization

    def set_max_thread_count(self, max_thread_count: Union[int, str]):
        """Set the maximum number of threads used during evaluation of potentials.

        Parameters
        ----------
        max_thread_count
            A positive integer, or `AUTO` (equivalently the string 'auto'), in which case the
            number of threads is determined automatically.

        Raises
        ------
        ValueError
            If `max_thread_count` is neither a positive integer nor `AUTO`. The current
            options are left unchanged.
        """
        max_thread_count = _check_thread_count(max_thread_count)
        self._parallelization = ParallelizationOptions(max_thread_count=max_thread_count)

    def switch_to_tbb(self, max_thread_count: Union[int, str] = AUTO):
        """Set the maximum number of threads used during evaluation of potentials.

        .. deprecated::
            Use :meth:`set_max_thread_count` instead.
        """
        warnings.warn("`switch_to_tbb` is deprecated and may be removed. "
                      "Use `set_max_thread_count` instead.", DeprecationWarning, stacklevel=2)
        self.set_max_thread_count(max_thread_count)

    def parallelization_options(self) -> ParallelizationOptions:
        return self._parallelization

    # Verbosity

    def set_verbosity_level(self, level: VerbosityLevel):
        """Set the amount of information printed out by the evaluation routines.

        Raises
        ------
        ValueError
            If `level` is not a :class:`VerbosityLevel` member or the name or value of one.
        """
        self._verbosity = VerbosityLevel.parse(level)

    def verbosity_level(self) -> VerbosityLevel:
        return self._verbosity

    def parameter_list(self) -> Optional["ParameterList"]:  # noqa: F821
        """A copy of the parameter list these options were built from, or None.

        The copy is owned by this object, so it stays valid for as long as the options do,
        independently of the lifetime of the original collection.
        """
        return self._parameter_list

    def __copy__(self):
        new = EvaluationOptions()
        new._mode = self._mode
        new._parallelization = copy.copy(self._parallelization)
        new._verbosity = self._verbosity
        new._parameter_list = self._parameter_list
        return new

    def __deepcopy__(self, memo):
        new = self.__copy__()
        if self._parameter_list is not None:
            new._parameter_list = self._parameter_list.copy()
        return new

    def __eq__(self, other):
        if not isinstance(other, EvaluationOptions):
            return NotImplemented
        return (self._mode == other._mode
                and self._parallelization == other._parallelization
                and self._verbosity == other._verbosity
                and self._parameter_list == other._parameter_list)

    def __repr__(self):
        return ("EvaluationOptions(mode={mode}, max_thread_count={threads}, "
                "verbosity={verbosity})".format(
                    mode=self._mode.value,
                    threads=self._parallelization.max_thread_count,
                    verbosity=self._verbosity.name))


# Fix documentation: append the parameter tables to the class docstrings.
def _reset_doc(cls, params):
    cls.__doc__ = "%s\n\nParameters\n----------%s\n" % (cls.__doc__, params)


_reset_doc(ParallelizationOptions, _docs["parallelization"])
_reset_doc(EvaluationOptions, _docs["evaluation"])
