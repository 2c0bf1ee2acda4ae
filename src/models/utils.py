"""
Utility functions for working with models.

Provides helper functions for:
- Reading YAML/JSON data files
- Converting raw rows into directory and entity models
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from sales_crm.errors import InvalidInputError

from .entities import ActivityLog, Anchor, DailyActivity, Dealer, Task, Vendor
from .users import User, UserDirectory


M = TypeVar("M", bound=BaseModel)


def read_data_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML or JSON mapping from disk."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise InvalidInputError(f"Cannot read data file {path}: {e}") from e

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidInputError(f"Cannot parse data file {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidInputError(f"Data file {path} must contain a mapping at the top level")
    return data


def rows_to_models(rows: Any, model: Type[M], collection: str) -> List[M]:
    """Validate a list of raw rows into models."""
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise InvalidInputError(f"'{collection}' must be a list")
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        raise InvalidInputError(f"Invalid '{collection}' record: {e}", errors=e.errors()) from e


def load_directory(path: Union[str, Path], enforce_role_order: bool = True) -> UserDirectory:
    """Load a user directory from a file with a top-level ``users`` list."""
    data = read_data_file(path)
    if "users" not in data:
        raise InvalidInputError(f"Directory file {path} has no 'users' list")
    users = rows_to_models(data["users"], User, "users")
    return UserDirectory(users, enforce_role_order=enforce_role_order)


@dataclass
class CRMDataset:
    """In-memory CRM collections loaded from a data file."""
    anchors: List[Anchor] = field(default_factory=list)
    dealers: List[Dealer] = field(default_factory=list)
    vendors: List[Vendor] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    activity_logs: List[ActivityLog] = field(default_factory=list)
    daily_activities: List[DailyActivity] = field(default_factory=list)


_COLLECTIONS: Dict[str, Type[BaseModel]] = {
    "anchors": Anchor,
    "dealers": Dealer,
    "vendors": Vendor,
    "tasks": Task,
    "activity_logs": ActivityLog,
    "daily_activities": DailyActivity,
}


def load_dataset(path: Union[str, Path]) -> CRMDataset:
    """Load CRM entity collections; missing collections are empty."""
    data = read_data_file(path)
    return CRMDataset(**{
        name: rows_to_models(data.get(name), model, name)
        for name, model in _COLLECTIONS.items()
    })
