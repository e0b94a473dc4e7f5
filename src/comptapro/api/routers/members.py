"""Company members endpoints (admin_entite only)."""

from fastapi import APIRouter, Depends, HTTPException

from comptapro.api.deps import get_admin_profile, get_member_service
from comptapro.api.schemas import MemberInvite, ProfilResponse, RoleUpdate
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.domain.models import Profil
from comptapro.services import MemberService

router = APIRouter(prefix="/membres", tags=["membres"])


@router.get("", response_model=list[ProfilResponse])
def list_membres(
    admin: Profil = Depends(get_admin_profile),
    service: MemberService = Depends(get_member_service),
):
    """List the members of the administrator's company."""
    return [ProfilResponse.model_validate(p) for p in service.list_members(admin)]


@router.post("", response_model=ProfilResponse, status_code=201)
def invite_membre(
    data: MemberInvite,
    admin: Profil = Depends(get_admin_profile),
    service: MemberService = Depends(get_member_service),
):
    """Create an identity and attach it to the company."""
    try:
        profil = service.invite_member(
            admin,
            data.email,
            data.password,
            nom=data.nom,
            prenom=data.prenom,
            role=data.role,
        )
        return ProfilResponse.model_validate(profil)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.patch("/{user_id}/role", response_model=ProfilResponse)
def change_role(
    user_id: str,
    data: RoleUpdate,
    admin: Profil = Depends(get_admin_profile),
    service: MemberService = Depends(get_member_service),
):
    """Change the role of a member."""
    try:
        return ProfilResponse.model_validate(service.change_role(admin, user_id, data.role))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
