"""World - entity and component storage with queries.

Entities are addressed by string ids so that agent names and structure ids
can be used directly as persistent keys.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generator, TypeVar, Union, cast

from hive.filters import Not
from hive.types import DeadEntityError, EntityId, SnapshotError

T = TypeVar("T")

QueryArg = Union[type, Not]

DespawnHook = Callable[["World", EntityId], None]


class World:
    def __init__(self) -> None:
        self._components: dict[type, dict[EntityId, Any]] = {}
        self._next_id: int = 0
        self._alive: dict[EntityId, None] = {}
        self._registry: dict[str, type] = {}
        self._on_despawn: list[DespawnHook] = []

    def spawn(self, entity_id: EntityId | None = None) -> EntityId:
        """Create an entity. Without an explicit id, ``#<n>`` ids are generated."""
        if entity_id is None:
            entity_id = f"#{self._next_id}"
            while entity_id in self._alive:
                self._next_id += 1
                entity_id = f"#{self._next_id}"
            self._next_id += 1
        elif entity_id in self._alive:
            raise ValueError(f"Entity {entity_id!r} is already alive")
        self._alive[entity_id] = None
        return entity_id

    def despawn(self, entity_id: EntityId) -> None:
        if entity_id not in self._alive:
            return
        for cb in list(self._on_despawn):
            cb(self, entity_id)
        del self._alive[entity_id]
        for store in self._components.values():
            store.pop(entity_id, None)

    def _register(self, ctype: type) -> None:
        key = f"{ctype.__module__}.{ctype.__qualname__}"
        self._registry[key] = ctype

    def register_component(self, ctype: type) -> None:
        """Explicit registration for cross-process restore."""
        self._register(ctype)

    def attach(self, entity_id: EntityId, component: Any) -> None:
        ctype = type(component)
        if entity_id not in self._alive:
            raise DeadEntityError(
                entity_id,
                f"Cannot attach {ctype.__name__} to dead entity {entity_id!r}",
            )
        self._register(ctype)
        self._components.setdefault(ctype, {})[entity_id] = component

    def detach(self, entity_id: EntityId, component_type: type) -> None:
        store = self._components.get(component_type)
        if store is not None:
            store.pop(entity_id, None)

    def get(self, entity_id: EntityId, component_type: type[T]) -> T:
        if entity_id not in self._alive:
            raise DeadEntityError(entity_id, f"Entity {entity_id!r} is not alive")
        store = self._components.get(component_type)
        if store is None or entity_id not in store:
            raise KeyError(
                f"Entity {entity_id!r} has no {component_type.__name__} component"
            )
        return cast(T, store[entity_id])

    def find(self, entity_id: EntityId | None, component_type: type[T]) -> T | None:
        """Total lookup: the component, or None for absent or dead entities."""
        if entity_id is None or entity_id not in self._alive:
            return None
        store = self._components.get(component_type)
        if store is None:
            return None
        return cast("T | None", store.get(entity_id))

    def has(self, entity_id: EntityId | None, component_type: type) -> bool:
        if entity_id is None or entity_id not in self._alive:
            return False
        store = self._components.get(component_type)
        return store is not None and entity_id in store

    def query(
        self, *args: QueryArg
    ) -> Generator[tuple[EntityId, tuple[Any, ...]], None, None]:
        """Yield ``(eid, components)`` for entities holding every required type.

        Iteration follows entity creation order, so repeated queries over an
        unchanged world are deterministic.
        """
        required = [a for a in args if not isinstance(a, Not)]
        excluded = [a.ctype for a in args if isinstance(a, Not)]
        if not required:
            return

        stores: list[dict[EntityId, Any]] = []
        for ctype in required:
            store = self._components.get(ctype)
            if not store:
                return
            stores.append(store)

        for eid in list(self._alive):
            if eid not in self._alive:
                continue
            if any(eid in self._components.get(ct, ()) for ct in excluded):
                continue
            components: list[Any] = []
            for store in stores:
                if eid not in store:
                    break
                components.append(store[eid])
            else:
                yield eid, tuple(components)

    def entities(self) -> frozenset[EntityId]:
        return frozenset(self._alive)

    def alive(self, entity_id: EntityId | None) -> bool:
        return entity_id is not None and entity_id in self._alive

    def on_despawn(self, callback: DespawnHook) -> None:
        """Register a callback fired before an entity's components are dropped."""
        self._on_despawn.append(callback)

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        components: dict[str, dict[str, dict[str, Any]]] = {}
        for ctype, store in self._components.items():
            if not store:
                continue
            if not dataclasses.is_dataclass(ctype):
                raise TypeError(
                    f"Cannot snapshot non-dataclass component {ctype.__qualname__}"
                )
            key = f"{ctype.__module__}.{ctype.__qualname__}"
            components[key] = {
                eid: dataclasses.asdict(comp)
                for eid, comp in store.items()
                if eid in self._alive
            }
        return {
            "entities": list(self._alive),
            "next_id": self._next_id,
            "components": components,
        }

    def restore(self, data: dict[str, Any]) -> None:
        components: dict[type, dict[EntityId, Any]] = {}
        for type_name, store_data in data["components"].items():
            ctype = self._registry.get(type_name)
            if ctype is None:
                raise SnapshotError(f"Unregistered component type: {type_name!r}")
            components[ctype] = {eid: ctype(**fields) for eid, fields in store_data.items()}
        self._alive = dict.fromkeys(data["entities"])
        self._next_id = data["next_id"]
        self._components = components
