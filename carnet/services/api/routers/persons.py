# carnet/services/api/routers/persons.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from carnet.common.settings import get_settings
from carnet.services.api.deps import get_person_service, require_reset_enabled
from carnet.services.persons.service import PersonService
from carnet.services.schemas.persons import PersonCreate, PersonRead, PersonUpdate

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/personnes", tags=["personnes"])


@router.get("", response_model=List[PersonRead])
def list_persons(
    last_name: Optional[str] = Query(None, description="Case-insensitive substring of the last name"),
    first_name: Optional[str] = Query(None, description="Case-insensitive substring of the first name"),
    phone: Optional[str] = Query(None, description="Substring of the stored phone number"),
    svc: PersonService = Depends(get_person_service),
) -> List[PersonRead]:
    if last_name is None and first_name is None and phone is None:
        return svc.find_all()
    return svc.search(last_name=last_name, first_name=first_name, phone=phone)


@router.post("", response_model=PersonRead, status_code=HTTPStatus.CREATED)
def create_person(
    payload: PersonCreate,
    svc: PersonService = Depends(get_person_service),
) -> PersonRead:
    return svc.create(payload)


@router.post(
    "/reset",
    status_code=HTTPStatus.NO_CONTENT,
    dependencies=[Depends(require_reset_enabled)],
)
def reset_persons(svc: PersonService = Depends(get_person_service)) -> None:
    svc.reset_table()
    return None


@router.get("/{person_id}", response_model=PersonRead)
def get_person(
    person_id: int = Path(...),
    svc: PersonService = Depends(get_person_service),
) -> PersonRead:
    return svc.find_by_id(person_id)


@router.put("/{person_id}", response_model=PersonRead)
def update_person(
    payload: PersonUpdate,
    person_id: int = Path(...),
    svc: PersonService = Depends(get_person_service),
) -> PersonRead:
    return svc.update(person_id, payload)


@router.delete("/{person_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_person(
    person_id: int = Path(...),
    svc: PersonService = Depends(get_person_service),
) -> None:
    svc.delete(person_id)
    # 204
    return None
