"""Filename templates for saved screenshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

SUFFIX = ".png"


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int


def render(template: str, dimensions: Dimensions, index: int, when: datetime) -> str:
    """Render a filename for ``template``.

    Supported placeholders are ``{N}`` (disambiguation index), ``{w}`` and
    ``{h}`` (image size) and ``{Y} {m} {d} {H} {M} {S}`` (capture time).
    Templates without ``{N}`` get ``_<index>`` appended for index > 0.
    """

    values = {
        "N": str(index),
        "w": str(dimensions.width),
        "h": str(dimensions.height),
        "Y": f"{when.year:04d}",
        "m": f"{when.month:02d}",
        "d": f"{when.day:02d}",
        "H": f"{when.hour:02d}",
        "M": f"{when.minute:02d}",
        "S": f"{when.second:02d}",
    }
    name = template
    for key, value in values.items():
        name = name.replace("{" + key + "}", value)
    if "{N}" not in template and index > 0:
        name = f"{name}_{index}"
    return name.replace("/", "_") + SUFFIX
