"""Unit tests for src/session/registry.py"""

import pytest

from src.core.shared_types import Side
from src.session.client import Client
from src.session.registry import ClientRegistry
from tests.conftest import MockConnection


@pytest.fixture
def registry() -> ClientRegistry:
    return ClientRegistry()


def new_client(name: str = "Tester") -> Client:
    return Client(connection=MockConnection(), name=name)


def test_add_registers_without_side(registry: ClientRegistry) -> None:
    """A new client is known but holds no side."""
    client = new_client()
    registry.add(client)
    assert client in registry
    assert registry.side_of(client) == Side.EMPTY
    assert len(registry) == 1


def test_adding_twice_does_not_duplicate(registry: ClientRegistry) -> None:
    """Adding a known client again keeps a single entry."""
    client = new_client()
    registry.add(client)
    registry.assign(client, Side.X)
    registry.add(client)
    assert len(registry) == 1
    # ... and does not reset the side
    assert registry.side_of(client) == Side.X


def test_clients_with_same_name_are_different(registry: ClientRegistry) -> None:
    """Identity, not display name, tells clients apart."""
    registry.add(new_client("Twin"))
    registry.add(new_client("Twin"))
    assert len(registry) == 2


def test_remove(registry: ClientRegistry) -> None:
    """Removing returns the side the client held."""
    client = new_client()
    registry.add(client)
    registry.assign(client, Side.O)
    assert registry.remove(client) == Side.O
    assert client not in registry
    assert len(registry) == 0


def test_remove_unknown_client_is_noop(registry: ClientRegistry) -> None:
    """Removing a stranger returns None and leaves the rest alone."""
    registry.add(new_client())
    assert registry.remove(new_client()) is None
    assert len(registry) == 1


def test_size_follows_register_unregister_sequence(registry: ClientRegistry) -> None:
    """Size equals the number of still connected clients, never negative, never duplicated."""
    clients = [new_client(f"client {i}") for i in range(5)]
    for client in clients:
        registry.add(client)
    for client in clients[:3]:
        registry.remove(client)
        registry.remove(client)
    assert len(registry) == 2
    assert set(registry) == set(clients[3:])


def test_holder_of(registry: ClientRegistry) -> None:
    """Look up who holds a side. Nobody ever holds EMPTY."""
    x_client, spectator = new_client("x"), new_client("spectator")
    registry.add(x_client)
    registry.add(spectator)
    registry.assign(x_client, Side.X)
    assert registry.holder_of(Side.X) is x_client
    assert registry.holder_of(Side.O) is None
    assert registry.holder_of(Side.EMPTY) is None


def test_side_cannot_be_held_twice(registry: ClientRegistry) -> None:
    """Assigning a taken side raises ValueError and changes nothing."""
    first, second = new_client("first"), new_client("second")
    registry.add(first)
    registry.add(second)
    registry.assign(first, Side.X)
    with pytest.raises(ValueError):
        registry.assign(second, Side.X)
    assert registry.side_of(second) == Side.EMPTY


def test_assign_unregistered_client(registry: ClientRegistry) -> None:
    """Only registered clients can get a side."""
    with pytest.raises(KeyError):
        registry.assign(new_client(), Side.X)


def test_as_dict_is_a_copy(registry: ClientRegistry) -> None:
    """Changing the snapshot does not touch the registry."""
    client = new_client()
    registry.add(client)
    snapshot = registry.as_dict()
    snapshot.clear()
    assert len(registry) == 1
