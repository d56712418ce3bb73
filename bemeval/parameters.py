from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from bemeval.options import EvaluationMode, VerbosityLevel, _check_thread_count

__all__ = ("ParameterList", "EvaluationParameters", "MODE_KEY", "MAX_THREAD_COUNT_KEY",
           "VERBOSITY_LEVEL_KEY")

MODE_KEY = "options.assembly.potentialOperatorAssemblyType"
MAX_THREAD_COUNT_KEY = "options.global.maxThreadCount"
VERBOSITY_LEVEL_KEY = "options.global.verbosityLevel"

_MISSING = object()


def _copy_tree(data: Mapping) -> dict:
    # Only the nesting is copied, leaf values are shared.
    return {k: _copy_tree(v) if isinstance(v, Mapping) else v for k, v in data.items()}


class ParameterList():
    """A generic, untyped collection of parameters.

    Keys are dotted paths such as ``"options.global.maxThreadCount"``. The underlying
    data may be flat (the dotted paths are the keys), nested (each path component
    indexes a sub-mapping), or a mixture of both. Flat keys take precedence.

    Parameters
    ----------
    data
        The mapping holding the parameters. Its nested mappings are copied on construction,
        while leaf values are kept by reference and never copied or inspected unless read.
        Sub-mappings returned by :meth:`get` are copies as well.
    """

    def __init__(self, data: Optional[Mapping] = None):
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise TypeError("Parameters must be a mapping, got %s" % (type(data).__name__))
        self._data = _copy_tree(data)

    @classmethod
    def wrap(cls, parameters: Union["ParameterList", Mapping]) -> "ParameterList":
        if isinstance(parameters, ParameterList):
            return parameters
        return cls(parameters)

    def _lookup(self, key: str):
        if key in self._data:
            return self._data[key]
        node = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        if value is _MISSING:
            return default
        if isinstance(value, Mapping):
            return _copy_tree(value)
        return value

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and self._lookup(key) is not _MISSING

    def copy(self) -> "ParameterList":
        return ParameterList(self._data)

    def to_dict(self) -> dict:
        return _copy_tree(self._data)

    def __eq__(self, other):
        if not isinstance(other, ParameterList):
            return NotImplemented
        return self._data == other._data

    def __repr__(self):
        return "ParameterList(%r)" % (self._data, )


@dataclass
class EvaluationParameters():
    """The evaluation settings found in a parameter list.

    Each field is None when the corresponding key is absent.
    """
    mode: Optional[EvaluationMode] = None
    max_thread_count: Optional[int] = None
    verbosity_level: Optional[VerbosityLevel] = None

    @classmethod
    def from_parameter_list(cls, parameters: Union[ParameterList, Mapping]) -> "EvaluationParameters":
        """Parse and validate the recognized keys of `parameters`.

        Raises
        ------
        ValueError
            If a recognized key holds an invalid value.
        """
        parameters = ParameterList.wrap(parameters)
        out = cls()
        if MODE_KEY in parameters:
            out.mode = EvaluationMode.parse(parameters.get(MODE_KEY))
        if MAX_THREAD_COUNT_KEY in parameters:
            out.max_thread_count = _check_thread_count(parameters.get(MAX_THREAD_COUNT_KEY))
        if VERBOSITY_LEVEL_KEY in parameters:
            out.verbosity_level = VerbosityLevel.parse(parameters.get(VERBOSITY_LEVEL_KEY))
        return out
