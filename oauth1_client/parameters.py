"""
Storage for OAuth protocol parameters and caller-supplied parameters.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Union

from .encoding import Parameter, ParameterList

ParameterSource = Union[Mapping[str, object], Iterable[Parameter]]


def _check_name(name: str):
    if not isinstance(name, str) or not name:
        raise ValueError("parameter name must be a non-empty string")


def iter_parameters(params: ParameterSource) -> ParameterList:
    """
    Flatten a mapping or an iterable of pairs into a parameter list.

    Mapping values that are lists or tuples produce one parameter per
    item, so repeated names can be expressed as ``{'a': ['1', '2']}``.
    """
    if isinstance(params, Mapping):
        items = params.items()
    else:
        items = params

    result = []
    for name, value in items:
        if isinstance(value, (list, tuple)):
            result.extend((name, item) for item in value)
        else:
            result.append((name, value))
    return result


class ParameterStore:
    """
    Holds protocol parameters and additional parameters of one request.

    Additional parameters may repeat a name. Protocol parameters are
    singletons: setting an existing name replaces its value.
    """

    def __init__(self):
        self._protocol: ParameterList = []
        self._additional: ParameterList = []

    def add_additional(self, name: str, value) -> None:
        _check_name(name)
        self._additional.append((name, str(value)))

    def set_additional(self, params: ParameterSource) -> None:
        """Append parameters from a mapping or an iterable of pairs."""
        for name, value in iter_parameters(params):
            self.add_additional(name, value)

    def additional(self) -> ParameterList:
        """Additional parameters in insertion order."""
        return list(self._additional)

    def additional_multi(self) -> Dict[str, List[str]]:
        """Additional parameters as a name to values mapping."""
        multi: Dict[str, List[str]] = {}
        for name, value in self._additional:
            multi.setdefault(name, []).append(value)
        return multi

    def clear_additional(self) -> None:
        self._additional = []

    def set_protocol(self, name: str, value) -> None:
        _check_name(name)
        value = str(value)
        for index, (existing, _) in enumerate(self._protocol):
            if existing == name:
                self._protocol[index] = (name, value)
                return
        self._protocol.append((name, value))

    def protocol(self) -> ParameterList:
        """Protocol parameters in the order they were added."""
        return list(self._protocol)

    def protocol_value(self, name: str) -> Optional[str]:
        for existing, value in self._protocol:
            if existing == name:
                return value
        return None

    def has_protocol(self) -> bool:
        return bool(self._protocol)

    def clear_protocol(self) -> None:
        self._protocol = []

    def clear(self) -> None:
        self.clear_protocol()
        self.clear_additional()
