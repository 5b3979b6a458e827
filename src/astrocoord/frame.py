"""Reference frame descriptors.

A :class:`Frame` only names a reference system and its equinox; it carries
no transformation logic.
"""

from __future__ import annotations

from dataclasses import dataclass

from .epoch import Epoch
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class Frame:
    """Named reference frame with its equinox.

    Attributes:
        name: Frame name, e.g. ``"ICRF"``.
        equinox: Equinox of the frame.

    Raises:
        InvalidArgumentError: If ``equinox`` is not an :class:`Epoch`.
    """

    name: str
    equinox: Epoch

    def __post_init__(self):
        if not isinstance(self.equinox, Epoch):
            raise InvalidArgumentError(
                f"Frame equinox must be an Epoch, got {type(self.equinox).__name__}"
            )

    @classmethod
    def ICRF(cls) -> Frame:
        """International Celestial Reference Frame, equinox J2000.0."""
        return cls("ICRF", Epoch.J2000())

    @classmethod
    def FK5(cls, equinox: Epoch | None = None) -> Frame:
        """Fifth Fundamental Catalogue frame, default equinox J2000.0."""
        return cls("FK5", Epoch.J2000() if equinox is None else equinox)

    @classmethod
    def FK4(cls, equinox: Epoch | None = None) -> Frame:
        """Fourth Fundamental Catalogue frame, default equinox B1950.0."""
        return cls("FK4", Epoch.B1950() if equinox is None else equinox)

    @property
    def equinox_label(self) -> str:
        """Equinox in epoch notation: Besselian for FK4, Julian otherwise."""
        if self.name == "FK4":
            return f"B{float(self.equinox.besselian_year()):.1f}"
        return f"J{float(self.equinox.julian_year()):.1f}"

    def __str__(self):
        return f"{self.name}/{self.equinox_label}"
