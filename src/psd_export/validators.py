"""
Validation functions for attrs.
"""

from typing import Any, Container

from attrs import define

from psd_export.errors import ValidationError

__all__ = ["in_", "range_"]


@define(repr=False, hash=True)
class _RangeValidator:
    minimum: float
    maximum: float
    exclude_minimum: bool = False

    def __call__(self, inst: Any, attribute: Any, value: Any) -> None:
        try:
            if self.exclude_minimum:
                ok = self.minimum < value <= self.maximum
            else:
                ok = self.minimum <= value <= self.maximum
        except TypeError:
            ok = False

        if not ok:
            raise ValidationError(
                "'{name}' must be in range {lower}{minimum!r}, {maximum!r}], "
                "got {value!r}".format(
                    name=attribute.name,
                    lower="(" if self.exclude_minimum else "[",
                    minimum=self.minimum,
                    maximum=self.maximum,
                    value=value,
                )
            )

    def __repr__(self) -> str:
        return "<range_ validator with [{minimum!r}, {maximum!r}]>".format(
            minimum=self.minimum, maximum=self.maximum
        )


@define(repr=False, hash=True)
class _InValidator:
    options: Container

    def __call__(self, inst: Any, attribute: Any, value: Any) -> None:
        try:
            ok = value in self.options
        except TypeError:
            ok = False
        if not ok:
            raise ValidationError(
                "'{name}' must be in {options!r}, got {value!r}".format(
                    name=attribute.name, options=self.options, value=value
                )
            )

    def __repr__(self) -> str:
        return "<in_ validator with options {options!r}>".format(
            options=self.options
        )


def range_(minimum: float, maximum: float, exclude_minimum: bool = False) -> Any:
    """
    A validator that raises a :exc:`~psd_export.errors.ValidationError` if the
    initializer is called with a value that does not belong in the
    [minimum, maximum] range, or (minimum, maximum] with ``exclude_minimum``.
    """
    return _RangeValidator(minimum, maximum, exclude_minimum)


def in_(options: Container) -> Any:
    """
    A validator that raises a :exc:`~psd_export.errors.ValidationError` if the
    initializer is called with a value that is not in ``options``.
    """
    return _InValidator(options)
