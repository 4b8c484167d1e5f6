"""Immutable role -> profile registry."""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator

from hive_colony.profiles import Profile
from hive_colony.roles import Carrier, Harvester, Repairer, Upgrader


class ProfileRegistry:
    """Role names mapped to profile instances, fixed at construction.

    Raises ValueError on duplicate roles. Lookup order follows the order the
    profiles were given in, which is also the order auto-spawning walks.
    """

    def __init__(self, profiles: Iterable[Profile]) -> None:
        table: dict[str, Profile] = {}
        for profile in profiles:
            if profile.role in table:
                raise ValueError(f"Duplicate profile role: {profile.role!r}")
            table[profile.role] = profile
        self._profiles = MappingProxyType(table)

    def get(self, role: str) -> Profile:
        """Return the profile for *role*. Raises KeyError if unknown."""
        try:
            return self._profiles[role]
        except KeyError:
            raise KeyError(f"Unknown role: {role!r}") from None

    def find(self, role: str | None) -> Profile | None:
        if role is None:
            return None
        return self._profiles.get(role)

    def roles(self) -> tuple[str, ...]:
        return tuple(self._profiles)

    def __contains__(self, role: object) -> bool:
        return role in self._profiles

    def __iter__(self) -> Iterator[Profile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)


def default_profiles() -> ProfileRegistry:
    return ProfileRegistry([Profile(), Harvester(), Carrier(), Repairer(), Upgrader()])
