"""
Store interfaces for the achievement registry.

Components never touch a concrete backend: they read and write entities through
the RegistryStore protocol and run every multi-entity mutation inside
`transaction()`, which must be all-or-nothing and serialized against every other
transaction on the same store.
"""

from __future__ import annotations

import abc
import json
from enum import Enum
from typing import (
    Any,
    ContextManager,
    Dict,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Type,
    Union,
    runtime_checkable,
)

from pydantic import BaseModel

from achievement_registry.domain.models import (
    AccountProfile,
    AchievementAward,
    AchievementDefinition,
    CertificationAward,
    CertificationDefinition,
    GlobalCounters,
    IssuerRecord,
)

Key = Union[str, int, Tuple[str, int]]

COUNTERS_KEY = "global"


class Collection(str, Enum):
    """Keyed entity sets held by a store."""

    ISSUERS = "issuers"
    ACHIEVEMENTS = "achievements"
    CERTIFICATIONS = "certifications"
    ACHIEVEMENT_AWARDS = "achievement_awards"
    CERTIFICATION_AWARDS = "certification_awards"
    PROFILES = "profiles"
    COUNTERS = "counters"


MODEL_FOR: Dict[Collection, Type[BaseModel]] = {
    Collection.ISSUERS: IssuerRecord,
    Collection.ACHIEVEMENTS: AchievementDefinition,
    Collection.CERTIFICATIONS: CertificationDefinition,
    Collection.ACHIEVEMENT_AWARDS: AchievementAward,
    Collection.CERTIFICATION_AWARDS: CertificationAward,
    Collection.PROFILES: AccountProfile,
    Collection.COUNTERS: GlobalCounters,
}


def encode_key(key: Key) -> str:
    """Render a key as a stable string (composite keys become JSON arrays)."""
    if isinstance(key, tuple):
        return json.dumps(list(key), separators=(",", ":"))
    return json.dumps(key)


def decode_key(raw: Any) -> Key:
    """Inverse of the JSON form of a key: lists come back as tuples."""
    if isinstance(raw, list):
        return tuple(raw)  # type: ignore[return-value]
    return raw


@runtime_checkable
class RegistryStore(Protocol):
    """
    Common interface all store backends must implement.

    `get` returns None for a missing key. `merge` applies a partial update to an
    existing entity (or to `default` when the key is missing) and writes the
    result back.
    """

    def get(self, collection: Collection, key: Key) -> Optional[BaseModel]:
        ...

    def put(self, collection: Collection, key: Key, value: BaseModel) -> None:
        ...

    def merge(
        self,
        collection: Collection,
        key: Key,
        changes: Mapping[str, Any],
        default: Optional[BaseModel] = None,
    ) -> BaseModel:
        ...

    def transaction(self) -> ContextManager[None]:
        ...

    def close(self) -> None:
        ...


class AbstractRegistryStore(abc.ABC):
    """
    ABC helper for concrete backends.

    Subclasses implement `get`, `put` and `transaction`; `merge` is expressed in
    terms of the first two.
    """

    @abc.abstractmethod
    def get(self, collection: Collection, key: Key) -> Optional[BaseModel]:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def put(self, collection: Collection, key: Key, value: BaseModel) -> None:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def transaction(self) -> ContextManager[None]:  # pragma: no cover
        raise NotImplementedError

    def merge(
        self,
        collection: Collection,
        key: Key,
        changes: Mapping[str, Any],
        default: Optional[BaseModel] = None,
    ) -> BaseModel:
        current = self.get(collection, key)
        if current is None:
            if default is None:
                raise KeyError(f"{collection.value}[{key!r}] does not exist")
            current = default
        updated = current.model_copy(update=dict(changes))
        self.put(collection, key, updated)
        return updated

    def close(self) -> None:
        """Release backend resources. No-op by default."""


__all__ = [
    "AbstractRegistryStore",
    "COUNTERS_KEY",
    "Collection",
    "Key",
    "MODEL_FOR",
    "RegistryStore",
    "decode_key",
    "encode_key",
]
