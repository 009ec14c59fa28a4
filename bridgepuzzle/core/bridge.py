"""
Bridge types and bridge tokens.
"""

from dataclasses import dataclass, field
from typing import Optional, Any, Dict

from ..geometry import Point, Placement, distance
from .. import config


@dataclass(frozen=True)
class BridgeType:
    """A class of bridge: appearance, span length and island-covering rules"""
    id: str = config.DEFAULT_BRIDGE_TYPE_ID
    colour: str = config.DEFAULT_BRIDGE_COLOUR
    width: float = config.DEFAULT_BRIDGE_WIDTH
    style: str = config.DEFAULT_BRIDGE_STYLE
    length: float = config.VARIABLE_LENGTH
    can_cover_island: bool = False
    must_cover_island: bool = False

    def has_length(self) -> bool:
        """True for fixed-length types"""
        return self.length != config.VARIABLE_LENGTH

    def allows_span(self, start: Point, end: Point) -> bool:
        """Whether a bridge of this type may join the two grid points"""
        if not self.has_length():
            return True
        return abs(distance(start, end) - self.length) <= config.LENGTH_TOLERANCE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BridgeType':
        """Create a bridge type from a spec entry (camelCase keys accepted)"""
        length = data.get('length')
        if length is None or length == "variable":
            length = config.VARIABLE_LENGTH

        return cls(
            id=data.get('id', config.DEFAULT_BRIDGE_TYPE_ID),
            colour=data.get('colour', data.get('color')) or config.DEFAULT_BRIDGE_COLOUR,
            width=data.get('width') or config.DEFAULT_BRIDGE_WIDTH,
            style=data.get('style') or config.DEFAULT_BRIDGE_STYLE,
            length=length,
            can_cover_island=bool(data.get('canCoverIsland', data.get('can_cover_island', False))),
            must_cover_island=bool(data.get('mustCoverIsland', data.get('must_cover_island', False))),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'colour': self.colour,
            'width': self.width,
            'style': self.style,
            'length': self.length if self.has_length() else "variable",
            'canCoverIsland': self.can_cover_island,
            'mustCoverIsland': self.must_cover_island,
        }


@dataclass(eq=False)
class Bridge:
    """
    A single bridge token owned by the inventory.

    A bridge is either unplaced (placement is None) or placed between two
    grid points; there is no half-placed state.
    """
    id: str
    type: BridgeType
    placement: Optional[Placement] = field(default=None)

    @property
    def is_placed(self) -> bool:
        return self.placement is not None

    @property
    def start(self) -> Optional[Point]:
        return self.placement.start if self.placement else None

    @property
    def end(self) -> Optional[Point]:
        return self.placement.end if self.placement else None

    def place(self, start: Point, end: Point):
        self.placement = Placement(start, end)

    def clear(self):
        self.placement = None

    def __repr__(self):
        where = f"{self.placement.start}->{self.placement.end}" if self.placement else "unplaced"
        return f"Bridge({self.id}, type={self.type.id}, {where})"
