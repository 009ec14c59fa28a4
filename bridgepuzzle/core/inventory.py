"""
Pool of bridge tokens grouped by type.
"""

from typing import List, Dict, Optional, Iterable, Tuple

from .bridge import Bridge, BridgeType


class BridgeInventory:
    """Owns every bridge of a puzzle, placed or not"""

    def __init__(self, types: Iterable[Tuple[BridgeType, int]]):
        """
        Generate the bridge tokens.

        Args:
            types: (bridge type, count) pairs; ids b1, b2, ... are handed out
                in declaration order
        """
        self._bridges: List[Bridge] = []
        self._types: Dict[str, BridgeType] = {}

        counter = 0
        for bridge_type, count in types:
            self._types.setdefault(bridge_type.id, bridge_type)
            for _ in range(count):
                counter += 1
                self._bridges.append(Bridge(f"b{counter}", bridge_type))

    @property
    def bridges(self) -> List[Bridge]:
        """All bridges, whether placed or not"""
        return self._bridges

    @property
    def bridge_types(self) -> List[BridgeType]:
        """Declared bridge types, unique by id, in declaration order"""
        return list(self._types.values())

    def get_type(self, type_id: str) -> Optional[BridgeType]:
        return self._types.get(type_id)

    def get_bridge(self, bridge_id: str) -> Bridge:
        """Look up a bridge by id; unknown ids are a caller bug"""
        for bridge in self._bridges:
            if bridge.id == bridge_id:
                return bridge
        raise ValueError(f"No such bridge {bridge_id}")

    def get_available_of_type(self, type_id: str) -> List[Bridge]:
        """Unplaced bridges of a given type"""
        return [b for b in self._bridges if b.type.id == type_id and not b.is_placed]

    def take_bridge(self, type_id: str) -> Optional[Bridge]:
        """Next unplaced bridge of the type, or None when the type is exhausted"""
        available = self.get_available_of_type(type_id)
        return available[0] if available else None

    def return_bridge(self, bridge_id: str):
        """Clear a bridge's placement so it is available again"""
        for bridge in self._bridges:
            if bridge.id == bridge_id:
                bridge.clear()
                return

    def counts_by_type(self) -> Dict[str, int]:
        """Unplaced bridges per type; exhausted types are left out"""
        counts: Dict[str, int] = {}
        for bridge in self._bridges:
            if not bridge.is_placed:
                counts[bridge.type.id] = counts.get(bridge.type.id, 0) + 1
        return counts

    def __len__(self):
        return len(self._bridges)

    def __repr__(self):
        return f"BridgeInventory({len(self._bridges)} bridges, available={self.counts_by_type()})"
