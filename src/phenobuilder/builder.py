"""
Fluent builder machinery shared by every entity.

A builder accumulates scalar fields with `_set` and repeated fields with
`_add` (call order is kept), then `build()` checks the required fields and
hands everything to the frozen dataclass it produces. Nothing partially built
is ever visible outside the builder.
"""

import abc
import typing

from collections import defaultdict

from .errors import MissingRequiredFieldError

T = typing.TypeVar("T")
B = typing.TypeVar("B", bound="Builder")


def is_unset(value: typing.Any) -> bool:
    # proto3 semantics: empty string and None both mean "not set"
    return value is None or (isinstance(value, str) and not value.strip())


def freeze(value: typing.Any, *names: str) -> None:
    """Coerce repeated fields of a frozen dataclass instance into tuples."""
    for name in names:
        object.__setattr__(value, name, tuple(getattr(value, name)))


class Builder(typing.Generic[T], metaclass=abc.ABCMeta):
    """
    Base class for the entity builders.

    Subclasses declare `entity` (used in error messages), `required` (field
    names that must be set) and implement `_value_type` to return the dataclass
    to instantiate.
    """

    entity: typing.ClassVar[str] = ""
    required: typing.ClassVar[typing.Tuple[str, ...]] = ()

    def __init__(self) -> None:
        self._values: dict[str, typing.Any] = {}
        self._repeated: dict[str, list] = defaultdict(list)

    @abc.abstractmethod
    def _value_type(self) -> typing.Callable[..., T]:
        raise NotImplementedError

    def _set(self: B, name: str, value: typing.Any) -> B:
        self._values[name] = value
        return self

    def _add(self: B, name: str, value: typing.Any) -> B:
        self._repeated[name].append(value)
        return self

    def _add_all(self: B, name: str, values: typing.Iterable[typing.Any]) -> B:
        self._repeated[name].extend(values)
        return self

    def _scalar_values(self) -> typing.Dict[str, typing.Any]:
        return dict(self._values)

    def build(self) -> T:
        fields = self._scalar_values()
        for name in self.required:
            if is_unset(fields.get(name)):
                raise MissingRequiredFieldError(self.entity, name)
        fields.update({name: tuple(items) for name, items in self._repeated.items()})
        return self._value_type()(**fields)
