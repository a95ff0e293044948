# carnet/services/graphql/schema.py
from __future__ import annotations

from typing import List, Optional

import strawberry
from fastapi import Depends
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from carnet.services.api.deps import get_person_service, require_reset_enabled
from carnet.services.graphql.types import PersonInput, PersonType
from carnet.services.persons.service import PersonService
from carnet.services.schemas.persons import PersonCreate, PersonUpdate


def _svc(info: Info) -> PersonService:
    return info.context["persons"]


@strawberry.type
class Query:
    @strawberry.field
    def all_personnes(self, info: Info) -> List[PersonType]:
        return [PersonType.from_read(p) for p in _svc(info).find_all()]

    @strawberry.field
    def personne(self, info: Info, id: int) -> PersonType:
        return PersonType.from_read(_svc(info).find_by_id(id))

    @strawberry.field
    def search_personnes(
        self,
        info: Info,
        last_name: Optional[str] = None,
        first_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> List[PersonType]:
        rows = _svc(info).search(last_name=last_name, first_name=first_name, phone=phone)
        return [PersonType.from_read(p) for p in rows]


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_personne(self, info: Info, input: PersonInput) -> PersonType:
        return PersonType.from_read(_svc(info).create(input.to_payload(PersonCreate)))

    @strawberry.mutation
    def update_personne(self, info: Info, id: int, input: PersonInput) -> PersonType:
        return PersonType.from_read(_svc(info).update(id, input.to_payload(PersonUpdate)))

    @strawberry.mutation
    def delete_personne(self, info: Info, id: int) -> bool:
        _svc(info).delete(id)
        return True

    @strawberry.mutation
    def reset_personnes(self, info: Info) -> bool:
        require_reset_enabled()
        _svc(info).reset_table()
        return True


schema = strawberry.Schema(query=Query, mutation=Mutation)


def get_context(svc: PersonService = Depends(get_person_service)) -> dict:
    return {"persons": svc}


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context)
