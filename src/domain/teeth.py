"""Dental chart: one Tooth per FDI (ISO 3950) position.

The chart is a dict keyed by position number. Positions follow the two-digit
FDI scheme: quadrant digit first (1-4 permanent, 5-8 deciduous), tooth digit
second.

    Permanent:  11-18, 21-28, 31-38, 41-48
    Deciduous:  51-55, 61-65, 71-75, 81-85
"""

import logging
from typing import Any, Dict, Iterable, Optional

from src.domain.enums import ToothCondition, string_to_tooth_condition
from src.domain.tracking import Listener, TrackedList

logger = logging.getLogger(__name__)

PERMANENT_POSITIONS: tuple[int, ...] = tuple(
    quadrant * 10 + tooth for quadrant in (1, 2, 3, 4) for tooth in range(1, 9)
)
DECIDUOUS_POSITIONS: tuple[int, ...] = tuple(
    quadrant * 10 + tooth for quadrant in (5, 6, 7, 8) for tooth in range(1, 6)
)
ALL_POSITIONS: frozenset[int] = frozenset(PERMANENT_POSITIONS + DECIDUOUS_POSITIONS)
HIGHEST_POSITION: int = max(ALL_POSITIONS)


def is_permanent(position: int) -> bool:
    return position in PERMANENT_POSITIONS


def is_deciduous(position: int) -> bool:
    return position in DECIDUOUS_POSITIONS


class Tooth:
    """A single chart entry.

    ``position`` is fixed at creation. ``notes`` is a tracked list and
    ``condition`` reports changes to the same listener, so the owning patient
    sees every edit to its chart.
    """

    def __init__(
        self,
        position: int,
        notes: Iterable[str] = (),
        condition: ToothCondition = ToothCondition.SOUND,
    ):
        self._position = int(position)
        self._condition = ToothCondition(condition)
        self._listener: Optional[Listener] = None
        self._notes = TrackedList(notes)

    @property
    def position(self) -> int:
        return self._position

    @property
    def notes(self) -> TrackedList:
        return self._notes

    @notes.setter
    def notes(self, value: Iterable[str]) -> None:
        self._notes.observe(None)
        self._notes = TrackedList(value, listener=self._listener)

    @property
    def condition(self) -> ToothCondition:
        return self._condition

    @condition.setter
    def condition(self, value: ToothCondition) -> None:
        value = ToothCondition(value)
        if value == self._condition:
            return
        self._condition = value
        if self._listener is not None:
            self._listener()

    def observe(self, listener: Optional[Listener]) -> None:
        """Route note and condition changes to ``listener``."""
        self._listener = listener
        self._notes.observe(listener)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tooth":
        notes = data.get("notes")
        return cls(
            position=data["ISO"],
            notes=notes if isinstance(notes, list) else [],
            condition=string_to_tooth_condition(data.get("condition")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ISO": self._position,
            "condition": self._condition.value,
            "notes": list(self._notes),
        }

    def __repr__(self) -> str:
        return f"<Tooth {self._position} {self._condition.value} notes={len(self._notes)}>"


def initialize_chart() -> Dict[int, Tooth]:
    """Create an empty chart with one Tooth per permanent and deciduous position."""
    chart: Dict[int, Tooth] = {}
    for position in PERMANENT_POSITIONS:
        chart[position] = Tooth(position)
    for position in DECIDUOUS_POSITIONS:
        chart[position] = Tooth(position)
    return chart


def load_tooth(chart: Dict[int, Tooth], data: Dict[str, Any]) -> Tooth:
    """Overwrite the chart entry at the record's position.

    The position is not checked against the numbering scheme; an unexpected
    position is stored as given.
    """
    tooth = Tooth.from_dict(data)
    if tooth.position not in ALL_POSITIONS:
        logger.debug(f"Loading tooth at non-standard position {tooth.position}")
    chart[tooth.position] = tooth
    return tooth


def chart_to_list(chart: Dict[int, Tooth]) -> list[Optional[Dict[str, Any]]]:
    """Encode a chart as a sparse list.

    Positions 0..85 sit at their own index with ``None`` in gaps. Positions
    outside that range follow in ascending order; decoding keys every entry
    by its ``ISO`` field, so they come back at the same position.
    """
    in_range = [position for position in chart if 0 <= position <= HIGHEST_POSITION]
    size = max(in_range) + 1 if in_range else 0
    encoded: list[Optional[Dict[str, Any]]] = [None] * size
    for position in in_range:
        encoded[position] = chart[position].to_dict()
    for position in sorted(p for p in chart if not 0 <= p <= HIGHEST_POSITION):
        encoded.append(chart[position].to_dict())
    return encoded
