from __future__ import annotations

from typing import Dict

from . import FieldRules, Required


# status is shown read-only in the edit dialog; it has no rules.
TASK_SCHEMA: Dict[str, FieldRules] = {
    "title": FieldRules(rules=(Required("Title is required", strip=True),)),
    "description": FieldRules(),
    "status": FieldRules(),
}
