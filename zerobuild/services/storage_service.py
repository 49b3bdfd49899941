"""로컬 JSON 저장소 (accounts / projects)

컬렉션 단위로 전체를 읽고, 메모리에서 수정한 뒤, 전체를 덮어쓴다.
락이나 버전이 없으므로 동시에 쓰면 마지막 쓰기가 이긴다.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import settings
from ..models.domain import Account, Project
from ..utils.logger import logger

ACCOUNTS = "accounts"
PROJECTS = "projects"

# 컬렉션별 고유 키
COLLECTION_KEYS = {
    ACCOUNTS: "email",
    PROJECTS: "id",
}

T = TypeVar("T", bound=BaseModel)


class StorageService:
    """컬렉션 = JSON 배열 파일 하나"""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: str) -> Path:
        if collection not in COLLECTION_KEYS:
            raise ValueError(f"Unknown collection: {collection}")
        return self.data_dir / f"{collection}.json"

    def _write(self, collection: str, records: List[Dict[str, Any]]) -> None:
        self._path(collection).write_text(
            json.dumps(records, ensure_ascii=False),
            encoding="utf-8"
        )

    # ------------------------------------------------------------------
    # 범용 계약
    # ------------------------------------------------------------------

    def list(self, collection: str) -> List[Dict[str, Any]]:
        """컬렉션 전체. 파일이 없거나 깨졌으면 빈 목록."""
        path = self._path(collection)
        if not path.exists():
            return []

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable {collection} store, treating as empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"{collection} store is not a JSON array, treating as empty")
            return []

        return [record for record in data if isinstance(record, dict)]

    def upsert(self, collection: str, entity: Dict[str, Any]) -> None:
        """같은 키가 있으면 교체, 없으면 뒤에 추가"""
        key = COLLECTION_KEYS[collection]
        records = self.list(collection)

        index = next(
            (i for i, r in enumerate(records) if r.get(key) == entity.get(key)),
            None
        )
        if index is None:
            records.append(entity)
        else:
            records[index] = entity

        self._write(collection, records)

    def delete(self, collection: str, key_value: str) -> None:
        key = COLLECTION_KEYS[collection]
        records = [r for r in self.list(collection) if r.get(key) != key_value]
        self._write(collection, records)

    def delete_all(self, collection: str) -> None:
        self._path(collection).unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # 타입 헬퍼
    # ------------------------------------------------------------------

    def _load(self, collection: str, model: Type[T]) -> List[T]:
        items = []
        for record in self.list(collection):
            try:
                items.append(model.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {collection} record: {e.error_count()} errors")
        return items

    @staticmethod
    def _dump(entity: BaseModel) -> Dict[str, Any]:
        return entity.model_dump(mode="json", by_alias=True, exclude_none=True)

    def get_accounts(self) -> List[Account]:
        return self._load(ACCOUNTS, Account)

    def save_account(self, account: Account) -> bool:
        """이미 있는 email이면 아무것도 하지 않는다. 저장 여부 반환."""
        if any(a.get("email") == account.email for a in self.list(ACCOUNTS)):
            logger.info(f"Account already exists, skipping: {account.email}")
            return False
        self.upsert(ACCOUNTS, self._dump(account))
        return True

    def get_projects(self) -> List[Project]:
        return self._load(PROJECTS, Project)

    def get_project(self, project_id: str) -> Optional[Project]:
        return next((p for p in self.get_projects() if p.id == project_id), None)

    def save_project(self, project: Project) -> None:
        self.upsert(PROJECTS, self._dump(project))

    def delete_project(self, project_id: str) -> None:
        self.delete(PROJECTS, project_id)

    def delete_all_projects(self) -> None:
        self.delete_all(PROJECTS)

    def replace_projects(self, projects: List[Project]) -> None:
        self._write(PROJECTS, [self._dump(p) for p in projects])


# 싱글톤 인스턴스
_storage_service = None

def get_storage_service() -> StorageService:
    """StorageService 인스턴스 가져오기"""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService(settings.data_dir)
    return _storage_service
