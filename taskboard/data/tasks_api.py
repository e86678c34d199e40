# taskboard/data/tasks_api.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
import structlog

from taskboard.core.models import Task
from taskboard.data.http import get_client


logger = structlog.get_logger(__name__)


async def list_tasks(client: Optional[httpx.AsyncClient] = None) -> List[Task]:
    """
    GET /tasks.

    Accepts either a bare JSON list or an object with a 'tasks' list.
    """
    if client is None:
        async with get_client() as own:
            return await list_tasks(own)

    response = await client.get("/tasks")
    response.raise_for_status()
    body = response.json()
    items = body.get("tasks", []) if isinstance(body, dict) else body
    tasks = [Task.from_dict(item) for item in items or [] if isinstance(item, dict)]
    logger.info("list_tasks", count=len(tasks))
    return tasks


async def update_task(task_id: Any, payload: Dict[str, Any], client: Optional[httpx.AsyncClient] = None) -> Task:
    """PUT /tasks/{id} with {title, description, status}; returns the stored task."""
    if task_id is None or str(task_id).strip() == "":
        raise ValueError("task_id is required")

    if client is None:
        async with get_client() as own:
            return await update_task(task_id, payload, own)

    body = {
        "title": payload.get("title", ""),
        "description": payload.get("description", ""),
        "status": payload.get("status"),
    }
    response = await client.put(f"/tasks/{task_id}", json=body)
    response.raise_for_status()
    logger.info("update_task", task_id=str(task_id), status_code=response.status_code)

    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data:
        return Task.from_dict({"id": task_id, **data})
    return Task.from_dict({**body, "id": task_id})
