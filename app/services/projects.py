"""Owner-scoped CRUD for sewing projects."""

import logging

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import NotFoundError
from app.models import Project
from app.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "status")


def _owned_project(db: Session, project_id: str, user_id: str) -> Project:
    project = (
        db.query(Project)
        .filter(Project.id == project_id, Project.user_id == user_id)
        .first()
    )
    if project is None:
        raise NotFoundError("Project not found")
    return project


def list_projects(db: Session, user_id: str) -> list[Project]:
    return (
        db.query(Project)
        .filter(Project.user_id == user_id)
        .order_by(Project.created_at.desc())
        .all()
    )


def get_project(db: Session, project_id: str, user_id: str) -> Project:
    return _owned_project(db, project_id, user_id)


def create_project(db: Session, user_id: str, body: ProjectCreate) -> Project:
    project = Project(user_id=user_id, **body.model_dump())
    with atomic(db):
        db.add(project)
    db.refresh(project)
    logger.info("Project created: project_id=%s user_id=%s", project.id, user_id)
    return project


def update_project(
    db: Session, project_id: str, user_id: str, body: ProjectUpdate
) -> Project:
    project = _owned_project(db, project_id, user_id)
    changes = body.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            del changes[field]
    with atomic(db):
        for field, value in changes.items():
            setattr(project, field, value)
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: str, user_id: str) -> None:
    """Delete a project; usage entries that referenced it keep their project_name."""
    project = _owned_project(db, project_id, user_id)
    with atomic(db):
        db.delete(project)
    logger.info("Project deleted: project_id=%s user_id=%s", project_id, user_id)
