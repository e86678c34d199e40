from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


DEFAULT_STATUS = "pending"


@dataclass(frozen=True)
class Task:
    id: Optional[Any]
    title: str = ""
    description: str = ""
    status: str = DEFAULT_STATUS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Build a Task from an API object.
        Accepts both 'id' and '_id' keys for the identifier.
        """
        task_id = data.get("id", data.get("_id"))
        return cls(
            id=task_id,
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            status=str(data.get("status") or DEFAULT_STATUS),
        )

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"
