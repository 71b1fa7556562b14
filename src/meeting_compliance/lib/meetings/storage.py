"""Entity store abstraction for governed meeting records.

Provides an ``EntityStore`` Protocol and an ``InMemoryEntityStore``
implementation. Stores are tenant scoped: every call takes the caller's
``TenantContext`` and never sees another tenant's rows.

The compliance core validates and returns new values; it does not serialize
concurrent writers. Stores are expected to reject stale writes. The
in-memory store does this with an optimistic ``version`` check: ``update``
only succeeds when the entity carries the version currently stored, and the
stored copy gets ``version + 1``.
"""

import asyncio
from dataclasses import replace
from typing import Any, Protocol

from loguru import logger

from meeting_compliance.lib.meetings.errors import ConcurrencyError, NotFoundError
from meeting_compliance.lib.meetings.types import TenantContext


class EntityStore(Protocol):
    """Abstract tenant-scoped store for one entity type.

    Entities are frozen dataclasses carrying ``id``, ``tenant_id`` and
    ``version`` fields.
    """

    async def find_by_id(self, tenant: TenantContext, entity_id: str) -> Any | None:
        """Return the entity, or ``None`` when it does not exist for the tenant."""
        ...

    async def get(self, tenant: TenantContext, entity_id: str) -> Any:
        """Return the entity.

        Raises:
            NotFoundError: If the entity does not exist for the tenant.
        """
        ...

    async def find_by_parent_id(self, tenant: TenantContext, parent_id: str) -> list[Any]:
        """Return all entities owned by ``parent_id`` in insertion order."""
        ...

    async def create(self, tenant: TenantContext, entity: Any) -> Any:
        """Store a new entity stamped with the tenant and version 1.

        Raises:
            ValueError: If an entity with the same id already exists.
        """
        ...

    async def update(self, tenant: TenantContext, entity: Any) -> Any:
        """Replace the stored entity and return the stored copy.

        Raises:
            NotFoundError: If the entity does not exist for the tenant.
            ConcurrencyError: If ``entity.version`` is stale.
        """
        ...


class InMemoryEntityStore:
    """Dictionary-backed implementation of EntityStore.

    Args:
        entity_name: Name used in errors and log messages (e.g. "meeting").
        parent_field: Attribute holding the parent id for
            ``find_by_parent_id``.
    """

    def __init__(self, entity_name: str, parent_field: str = "meeting_id") -> None:
        self.entity_name = entity_name
        self._parent_field = parent_field
        self._rows: dict[tuple[str, str], Any] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, tenant: TenantContext, entity_id: str) -> Any | None:
        return self._rows.get((tenant.tenant_id, entity_id))

    async def get(self, tenant: TenantContext, entity_id: str) -> Any:
        entity = await self.find_by_id(tenant, entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    async def find_by_parent_id(self, tenant: TenantContext, parent_id: str) -> list[Any]:
        return [
            entity
            for (tenant_id, _), entity in self._rows.items()
            if tenant_id == tenant.tenant_id and getattr(entity, self._parent_field) == parent_id
        ]

    async def create(self, tenant: TenantContext, entity: Any) -> Any:
        async with self._lock:
            key = (tenant.tenant_id, entity.id)
            if key in self._rows:
                msg = f"{self.entity_name} already exists: {entity.id}"
                raise ValueError(msg)
            stored = replace(entity, tenant_id=tenant.tenant_id, version=1)
            self._rows[key] = stored
        logger.debug(f"Created {self.entity_name} {entity.id} for tenant {tenant.tenant_id}")
        return stored

    async def update(self, tenant: TenantContext, entity: Any) -> Any:
        async with self._lock:
            key = (tenant.tenant_id, entity.id)
            current = self._rows.get(key)
            if current is None:
                raise NotFoundError(self.entity_name, entity.id)
            if entity.version != current.version:
                raise ConcurrencyError(self.entity_name, entity.id, entity.version, current.version)
            stored = replace(entity, tenant_id=tenant.tenant_id, version=current.version + 1)
            self._rows[key] = stored
        logger.debug(f"Updated {self.entity_name} {entity.id} to version {stored.version}")
        return stored
