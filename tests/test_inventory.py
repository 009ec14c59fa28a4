import pytest

from bridgepuzzle.core.bridge import BridgeType
from bridgepuzzle.core.inventory import BridgeInventory
from bridgepuzzle.geometry import Point


@pytest.fixture
def inventory():
    return BridgeInventory([(BridgeType('wood'), 2), (BridgeType('stone', length=2), 1)])


def test_ids_follow_declaration_order(inventory):
    assert [b.id for b in inventory.bridges] == ['b1', 'b2', 'b3']
    assert [b.type.id for b in inventory.bridges] == ['wood', 'wood', 'stone']
    assert len(inventory) == 3


def test_counts_by_type_leave_out_exhausted_types(inventory):
    assert inventory.counts_by_type() == {'wood': 2, 'stone': 1}

    inventory.get_bridge('b3').place(Point(0, 0), Point(2, 0))
    assert inventory.counts_by_type() == {'wood': 2}


def test_placed_bridges_are_never_counted_available(inventory):
    for bridge in inventory.bridges:
        bridge.place(Point(0, 0), Point(1, 0))
        counts = inventory.counts_by_type()
        placed_of_type = sum(1 for b in inventory.bridges if b.type.id == bridge.type.id and b.is_placed)
        total_of_type = sum(1 for b in inventory.bridges if b.type.id == bridge.type.id)
        assert counts.get(bridge.type.id, 0) == total_of_type - placed_of_type


def test_take_returns_none_when_exhausted(inventory):
    bridge = inventory.take_bridge('stone')
    assert bridge.id == 'b3'
    bridge.place(Point(0, 0), Point(2, 0))

    assert inventory.take_bridge('stone') is None
    assert inventory.take_bridge('no-such-type') is None


def test_return_then_take_round_trips(inventory):
    first = inventory.take_bridge('wood')
    first.place(Point(0, 0), Point(1, 0))
    assert inventory.take_bridge('wood').id == 'b2'

    inventory.return_bridge(first.id)
    assert not first.is_placed
    assert inventory.take_bridge('wood') is first


def test_return_is_idempotent(inventory):
    inventory.get_bridge('b1').place(Point(0, 0), Point(1, 0))
    inventory.return_bridge('b1')
    inventory.return_bridge('b1')
    assert inventory.counts_by_type() == {'wood': 2, 'stone': 1}


def test_unknown_bridge_id_raises(inventory):
    with pytest.raises(ValueError, match="No such bridge"):
        inventory.get_bridge('b99')


def test_bridge_types_are_unique_by_id():
    wood = BridgeType('wood')
    inventory = BridgeInventory([(wood, 1), (BridgeType('stone'), 1), (wood, 2)])
    assert [t.id for t in inventory.bridge_types] == ['wood', 'stone']
    assert len(inventory.get_available_of_type('wood')) == 3


def test_bridge_type_from_dict_reads_variable_length():
    bridge_type = BridgeType.from_dict({'id': 'rope', 'length': 'variable', 'color': 'red',
                                        'canCoverIsland': True})
    assert not bridge_type.has_length()
    assert bridge_type.colour == 'red'
    assert bridge_type.can_cover_island
    assert bridge_type.to_dict()['length'] == 'variable'


def test_fixed_length_type_allows_span_within_tolerance():
    bridge_type = BridgeType('plank', length=3)
    assert bridge_type.allows_span(Point(0, 0), Point(3, 0))
    assert not bridge_type.allows_span(Point(0, 0), Point(2, 0))
