"""
Registry pattern helper.

Encoders register themselves under their :py:class:`ExportFormat`::

    ENCODERS, register = new_registry(attribute="format")

    @register(ExportFormat.TGA)
    def encode_tga_raster(raster, options):
        ...
"""

from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def new_registry(
    attribute: Optional[str] = None,
) -> tuple[dict[Any, Callable[..., Any]], Callable]:
    """
    Returns an empty dict and a @register decorator.

    :param attribute: Optional attribute name set to the key on each
        registered function.
    """
    registry: dict[Any, Callable[..., Any]] = {}

    def register(key: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
        def decorator(func: Callable[..., T]) -> Callable[..., T]:
            if key in registry:
                raise KeyError("Duplicate registration for %r" % (key,))
            registry[key] = func
            if attribute:
                setattr(func, attribute, key)
            return func

        return decorator

    return registry, register
