"""
Repositories de Equipe, Membro e Convite.

Coleções globais, fora do escopo solo/equipe; falhas de backend sobem
como BackendUnavailableError.
"""

import asyncio
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from legalx.db.base import DocumentBackend, Filtro, with_id
from legalx.models.base import utcnow
from legalx.models.equipe import (
    ConviteEquipe,
    Equipe,
    MembroEquipe,
    StatusConvite,
    StatusMembro,
)

ModelType = TypeVar("ModelType", bound=BaseModel)


class GlobalRepository(Generic[ModelType]):
    """CRUD simples sobre uma coleção global."""

    def __init__(self, backend: DocumentBackend, collection: str, model: type[ModelType]):
        self.backend = backend
        self.collection = collection
        self.model = model

    async def get_by_id(self, id: str) -> ModelType | None:
        doc = await self.backend.get(self.collection, id)
        return self.model.model_validate(doc) if doc else None

    async def create(self, **fields: Any) -> ModelType:
        doc_id = await self.backend.add(self.collection, fields)
        return self.model.model_validate(with_id(doc_id, fields))

    async def update(self, id: str, **fields: Any) -> ModelType | None:
        if not await self.backend.update(self.collection, id, fields):
            return None
        return await self.get_by_id(id)

    async def delete(self, id: str) -> bool:
        return await self.backend.delete(self.collection, id)

    async def _find(self, *filters: Filtro, order_by: str | None = None) -> list[ModelType]:
        docs = await self.backend.query(self.collection, list(filters), order_by=order_by)
        return [self.model.model_validate(doc) for doc in docs]


class EquipeRepository(GlobalRepository[Equipe]):

    def __init__(self, backend: DocumentBackend):
        super().__init__(backend, "teams", Equipe)

    async def get_by_owner(self, owner_uid: str) -> list[Equipe]:
        return await self._find(("owner_uid", "==", owner_uid))

    async def get_many(self, ids: list[str]) -> list[Equipe]:
        equipes = await asyncio.gather(*(self.get_by_id(i) for i in ids))
        return [e for e in equipes if e is not None]


class MembroRepository(GlobalRepository[MembroEquipe]):

    def __init__(self, backend: DocumentBackend):
        super().__init__(backend, "teamMembers", MembroEquipe)

    async def get_member(self, team_id: str, uid: str) -> MembroEquipe | None:
        membros = await self._find(("team_id", "==", team_id), ("uid", "==", uid))
        return membros[0] if membros else None

    async def get_active_member(self, team_id: str, uid: str) -> MembroEquipe | None:
        membro = await self.get_member(team_id, uid)
        if membro is None or membro.status is not StatusMembro.ACTIVE:
            return None
        return membro

    async def list_by_team(self, team_id: str) -> list[MembroEquipe]:
        return await self._find(("team_id", "==", team_id), order_by="added_at")

    async def list_active_by_user(self, uid: str) -> list[MembroEquipe]:
        return await self._find(
            ("uid", "==", uid),
            ("status", "==", StatusMembro.ACTIVE.value),
        )

    async def touch(self, id: str) -> None:
        await self.backend.update(self.collection, id, {"last_active_at": utcnow()})


class ConviteRepository(GlobalRepository[ConviteEquipe]):

    def __init__(self, backend: DocumentBackend):
        super().__init__(backend, "invitations", ConviteEquipe)

    async def list_by_team(self, team_id: str) -> list[ConviteEquipe]:
        convites = await self._find(("team_id", "==", team_id))
        return sorted(convites, key=lambda c: c.created_at, reverse=True)

    async def find_pending(self, team_id: str, email: str) -> ConviteEquipe | None:
        convites = await self._find(
            ("team_id", "==", team_id),
            ("email", "==", email.strip().lower()),
            ("status", "==", StatusConvite.PENDING.value),
        )
        return convites[0] if convites else None

    async def set_status(
        self,
        id: str,
        status: StatusConvite,
        **fields: Any,
    ) -> ConviteEquipe | None:
        return await self.update(id, status=status.value, **fields)

