# api/dataset_routes.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utils.db_manager import get_db
from models.user import User
from models.dataset import (
    DatasetCreate, DatasetUpdate,
    DatasetResponse, DatasetSummary, DeletedDataset
)
from repositories.dataset_repo import DatasetRepository
from services.access_service import AccessService
from services.export_service import DEFAULT_FORMAT, InvalidExportFormat, export_dataset, validate_format
from api.middleware import get_current_user

router = APIRouter()
logger = logging.getLogger("dataset_service.api.datasets")

def to_summary(dataset, legacy_count: int, training_count: int) -> DatasetSummary:
    return DatasetSummary(
        **DatasetResponse.model_validate(dataset).model_dump(),
        total_conversations=legacy_count + training_count,
        legacy_conversations=legacy_count,
        training_conversations=training_count
    )

@router.post("", status_code=status.HTTP_201_CREATED)
def create_dataset(
    dataset_data: DatasetCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Create a draft dataset in one of the caller's workspaces
    """
    workspace = AccessService(db, current_user).workspace(dataset_data.workspace_id)

    dataset = DatasetRepository(db).create(
        workspace_id=workspace.id,
        name=dataset_data.name,
        description=dataset_data.description,
        purpose=dataset_data.purpose,
        model=dataset_data.model
    )

    return {
        "success": True,
        "message": "Dataset created successfully.",
        "dataset": DatasetResponse.model_validate(dataset),
        "workspace": {
            "workspace_id": workspace.workspace_id,
            "workspace_name": workspace.workspace_name
        }
    }

@router.get("", response_model=List[DatasetSummary])
def get_datasets(
    workspace_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List datasets of a workspace with conversation counts and export stats
    """
    if not workspace_id or not workspace_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Workspace ID is required as a query parameter."
        )

    workspace = AccessService(db, current_user).workspace(workspace_id.strip())
    return [
        to_summary(dataset, legacy_count, training_count)
        for dataset, legacy_count, training_count in DatasetRepository(db).get_all_by_workspace(workspace.id)
    ]

@router.get("/{dataset_id}", response_model=DatasetResponse)
def get_dataset(
    dataset_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get a dataset by its public ID
    """
    return AccessService(db, current_user).dataset(dataset_id)

@router.put("/{dataset_id}", response_model=DatasetResponse)
def update_dataset(
    dataset_id: str,
    dataset_data: DatasetUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update dataset metadata; only the fields sent are changed
    """
    dataset = AccessService(db, current_user).dataset(dataset_id)
    update_data = dataset_data.model_dump(exclude_unset=True)
    # purpose and status are NOT NULL
    for key in ("purpose", "status"):
        if key in update_data and update_data[key] is None:
            del update_data[key]

    return DatasetRepository(db).update(dataset, **update_data)

@router.delete("/{dataset_id}", response_model=DeletedDataset)
def delete_dataset(
    dataset_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete a dataset and every conversation in it
    """
    dataset = AccessService(db, current_user).dataset(dataset_id)
    dataset_repo = DatasetRepository(db)

    deleted = DeletedDataset(
        id=dataset.id,
        dataset_id=dataset.dataset_id,
        name=dataset.name,
        workspace_id=dataset.workspace.workspace_id,
        conversations_deleted=dataset_repo.count_conversations(dataset)
    )
    dataset_repo.delete(dataset)
    logger.info(f"User {current_user.id} deleted dataset {dataset_id}")

    return deleted

@router.get("/{dataset_id}/export")
def export_dataset_file(
    dataset_id: str,
    format: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Download the dataset as an OpenAI fine-tuning file (json or jsonl)
    """
    # Reject bad formats before any query runs
    try:
        export_format = validate_format(format or DEFAULT_FORMAT)
    except InvalidExportFormat as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    dataset_repo = DatasetRepository(db)
    dataset = dataset_repo.get_for_export(dataset_id)

    if not dataset:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dataset with ID {dataset_id} not found."
        )
    if not dataset.workspace:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dataset -> Workspace with ID {dataset_id} not found."
        )

    export_file = export_dataset(dataset, export_format)

    # Export stats are best-effort; the download does not depend on them
    try:
        dataset_repo.record_export(dataset)
    except SQLAlchemyError as e:
        logger.warning(f"Could not update export stats for dataset {dataset_id}: {e}")

    return Response(
        content=export_file.body,
        media_type=export_file.content_type,
        headers=export_file.headers
    )
