import os

from .options import (  # isort:skip
    AUTO,
    EvaluationMode,
    EvaluationOptions,
    ParallelizationOptions,
    VerbosityLevel,
)
from .parameters import ParameterList, EvaluationParameters  # isort:skip
from .context import EvaluationContext  # isort:skip

# Set __version__ attribute on the package
init_dir = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(init_dir, "VERSION")) as version_file:
    __version__ = version_file.read().strip()

__all__ = (
    "AUTO",
    "EvaluationMode",
    "EvaluationOptions",
    "ParallelizationOptions",
    "VerbosityLevel",
    "ParameterList",
    "EvaluationParameters",
    "EvaluationContext",
    "__version__",
)
