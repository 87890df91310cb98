# repositories/dataset_repo.py
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from models.conversation import Conversation, Message, TrainingConversation
from models.dataset import Dataset, DEFAULT_PURPOSE, DEFAULT_STATUS
from models.workspace import Workspace
from repositories.base import BaseRepository

class DatasetRepository(BaseRepository):
    def get_by_public_id(self, dataset_id: str) -> Optional[Dataset]:
        return self.db.query(Dataset).filter(Dataset.dataset_id == dataset_id).first()

    def get_for_export(self, dataset_id: str) -> Optional[Dataset]:
        """
        Load a dataset with everything the export needs in one round of queries:
        workspace tools, training conversations, their messages and tool calls
        """
        return (
            self.db.query(Dataset)
            .options(
                selectinload(Dataset.workspace).selectinload(Workspace.tools),
                selectinload(Dataset.training_conversations)
                .selectinload(TrainingConversation.messages)
                .selectinload(Message.tool_calls),
            )
            .filter(Dataset.dataset_id == dataset_id)
            .first()
        )

    def get_all_by_workspace(self, workspace_id: int) -> List[Tuple[Dataset, int, int]]:
        """Datasets of a workspace with legacy and training conversation counts, newest first"""
        legacy_count = (
            select(func.count(Conversation.id))
            .where(Conversation.dataset_id == Dataset.id)
            .correlate(Dataset)
            .scalar_subquery()
        )
        training_count = (
            select(func.count(TrainingConversation.id))
            .where(TrainingConversation.dataset_id == Dataset.id)
            .correlate(Dataset)
            .scalar_subquery()
        )
        return (
            self.db.query(Dataset, legacy_count, training_count)
            .filter(Dataset.workspace_id == workspace_id)
            .order_by(Dataset.created_at.desc(), Dataset.id.desc())
            .all()
        )

    def count_conversations(self, dataset: Dataset) -> int:
        legacy = self.db.query(func.count(Conversation.id)).filter(
            Conversation.dataset_id == dataset.id
        ).scalar()
        training = self.db.query(func.count(TrainingConversation.id)).filter(
            TrainingConversation.dataset_id == dataset.id
        ).scalar()
        return (legacy or 0) + (training or 0)

    def create(self, workspace_id: int, name: Optional[str] = None, description: Optional[str] = None,
               purpose: Optional[str] = None, model: Optional[str] = None) -> Dataset:
        dataset = Dataset(
            workspace_id=workspace_id,
            name=name or f"Dataset {datetime.now(timezone.utc).isoformat()}",
            description=description,
            purpose=purpose or DEFAULT_PURPOSE,
            model=model,
            status=DEFAULT_STATUS,
        )
        self.db.add(dataset)
        self._commit(dataset)
        return dataset

    def update(self, dataset: Dataset, **fields) -> Dataset:
        for key, value in fields.items():
            setattr(dataset, key, value)
        self._commit(dataset)
        return dataset

    def record_export(self, dataset: Dataset) -> None:
        """Bump the export counter in SQL so concurrent exports are not lost"""
        self.db.query(Dataset).filter(Dataset.id == dataset.id).update(
            {
                Dataset.export_count: Dataset.export_count + 1,
                Dataset.last_export_at: datetime.now(timezone.utc),
            },
            synchronize_session=False,
        )
        self._commit()

    def delete(self, dataset: Dataset) -> None:
        self.db.delete(dataset)
        self._commit()
