"""Master-equation methods and the six third-order Feynman pathways.

Each pathway carries its double-sided diagram as data: on which side of
the density matrix the three field interactions act and which dipole
operator closes the diagram. Rephasing (R) pathways start with an
interaction from the right (bra side), non-rephasing (NR) pathways from
the left (ket side), so that emission always happens from the left.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple, Union

from qutip import Qobj

from .exceptions import InvalidMethodError, InvalidPathwayError

__all__ = [
    "Method",
    "Side",
    "PathwayRule",
    "Pathway",
    "BRANCHES",
]

BRANCHES = ("gsb", "se", "esa")


class Method(str, Enum):
    """Master-equation flavour used for every field-free propagation."""

    LINDBLAD = "lindblad"
    REDFIELD = "redfield"

    @classmethod
    def from_value(cls, value: Union["Method", str]) -> "Method":
        if isinstance(value, cls):
            return value
        key = str(value).lower().strip()
        if key in {"linblad", "lindblad", "mesolve"}:
            return cls.LINDBLAD
        if key in {"redfield", "brmesolve", "blochredfield"}:
            return cls.REDFIELD
        raise InvalidMethodError(
            f"unknown method '{value}'. Supported: {[m.value for m in cls]}"
        )


class Side(str, Enum):
    """Side of the density matrix a dipole interaction acts on."""

    LEFT = "left"  # ket side: mu * rho
    RIGHT = "right"  # bra side: rho * mu

    @property
    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT

    def apply(self, dipole: Qobj, rho: Qobj) -> Qobj:
        if self is Side.LEFT:
            return dipole * rho
        return rho * dipole


@dataclass(frozen=True)
class PathwayRule:
    first: Side
    second: Side
    third: Side
    esa: bool = False

    def mirrored(self) -> "PathwayRule":
        """Same diagram with every interaction moved to the other side."""
        return PathwayRule(
            first=self.first.opposite,
            second=self.second.opposite,
            third=self.third.opposite,
            esa=self.esa,
        )


_L, _R = Side.LEFT, Side.RIGHT


class Pathway(Enum):
    """The six pathway variants: {R, NR} x {gsb, se, esa}."""

    R_GSB = ("R_gsb", PathwayRule(_R, _R, _L))
    NR_GSB = ("NR_gsb", PathwayRule(_L, _L, _L))
    R_SE = ("R_se", PathwayRule(_R, _L, _R))
    NR_SE = ("NR_se", PathwayRule(_L, _R, _R))
    R_ESA = ("R_esa", PathwayRule(_R, _L, _L, esa=True))
    NR_ESA = ("NR_esa", PathwayRule(_L, _R, _L, esa=True))

    def __init__(self, label: str, rule: PathwayRule) -> None:
        self.label = label
        self.rule = rule

    def __str__(self) -> str:
        return self.label

    @property
    def rephasing(self) -> bool:
        return self.label.startswith("R_")

    @property
    def branch(self) -> str:
        return self.label.split("_", 1)[1]

    @property
    def detection_sign(self) -> float:
        # minus sign for ESA follows from the Feynman diagrams
        return -1.0 if self.rule.esa else 1.0

    @classmethod
    def from_label(cls, label: Union["Pathway", str]) -> "Pathway":
        if isinstance(label, cls):
            return label
        for member in cls:
            if member.label == label:
                return member
        raise InvalidPathwayError(
            f"unknown pathway '{label}'. Supported: {[p.label for p in cls]}"
        )

    @classmethod
    def pairs(cls) -> Iterator[Tuple["Pathway", "Pathway"]]:
        """Yield (non-rephasing, rephasing) per branch in gsb, se, esa order."""
        for branch in BRANCHES:
            yield cls.from_label(f"NR_{branch}"), cls.from_label(f"R_{branch}")
