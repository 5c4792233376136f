"""Sewing project endpoints (owner-scoped CRUD)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.project import (
    ProjectCreate,
    ProjectOut,
    ProjectResponse,
    ProjectSavedResponse,
    ProjectsListResponse,
    ProjectUpdate,
)
from app.services import projects

router = APIRouter()


@router.get("", response_model=ProjectsListResponse)
def list_projects(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProjectsListResponse:
    items = projects.list_projects(db, current_user.id)
    return ProjectsListResponse(projects=[ProjectOut.model_validate(p) for p in items])


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProjectResponse:
    project = projects.get_project(db, project_id, current_user.id)
    return ProjectResponse(project=ProjectOut.model_validate(project))


@router.post("", response_model=ProjectSavedResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProjectSavedResponse:
    project = projects.create_project(db, current_user.id, body)
    return ProjectSavedResponse(
        message="Project created successfully", project=ProjectOut.model_validate(project)
    )


@router.put("/{project_id}", response_model=ProjectSavedResponse)
def update_project(
    project_id: str,
    body: ProjectUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProjectSavedResponse:
    project = projects.update_project(db, project_id, current_user.id, body)
    return ProjectSavedResponse(
        message="Project updated successfully", project=ProjectOut.model_validate(project)
    )


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    projects.delete_project(db, project_id, current_user.id)
    return MessageResponse(message="Project deleted successfully")
