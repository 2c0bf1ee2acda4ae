"""
User, role and directory models for the sales hierarchy.

The directory is the read-only source the visibility layer works on:
- Users with an optional reports-to link (``manager_id``)
- A static role table giving each role a seniority rank and managerial flag
- An explicit reverse-adjacency index (manager -> direct reports)

Directories are validated on construction: unknown managers, duplicate ids,
role-order violations and reports-to cycles are rejected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sales_crm.errors import InvalidInputError, NotFoundError


class Role(str, Enum):
    """Roles in the sales organisation."""
    SALES = "Sales"
    ETB_TEAM = "ETB Team"
    BUSINESS_DEVELOPMENT = "Business Development"
    AREA_SALES_MANAGER = "Area Sales Manager"
    ZONAL_SALES_MANAGER = "Zonal Sales Manager"
    REGIONAL_SALES_MANAGER = "Regional Sales Manager"
    ETB_MANAGER = "ETB Manager"
    NATIONAL_SALES_MANAGER = "National Sales Manager"
    ADMIN = "Admin"


@dataclass(frozen=True)
class RoleInfo:
    """Static hierarchy data for a role."""
    rank: int
    managerial: bool
    onboarding: bool = False


ROLE_HIERARCHY: Dict[Role, RoleInfo] = {
    Role.SALES: RoleInfo(rank=0, managerial=False),
    Role.ETB_TEAM: RoleInfo(rank=0, managerial=False),
    Role.BUSINESS_DEVELOPMENT: RoleInfo(rank=0, managerial=False, onboarding=True),
    Role.AREA_SALES_MANAGER: RoleInfo(rank=1, managerial=True),
    Role.ZONAL_SALES_MANAGER: RoleInfo(rank=2, managerial=True),
    Role.REGIONAL_SALES_MANAGER: RoleInfo(rank=3, managerial=True),
    Role.ETB_MANAGER: RoleInfo(rank=3, managerial=True),
    Role.NATIONAL_SALES_MANAGER: RoleInfo(rank=4, managerial=True),
    Role.ADMIN: RoleInfo(rank=5, managerial=True),
}


def role_rank(role: Role) -> int:
    """Seniority rank of a role; higher is more senior."""
    return ROLE_HIERARCHY[role].rank


def is_managerial(role: Role) -> bool:
    """Whether a role may have subordinates."""
    return ROLE_HIERARCHY[role].managerial


def can_manage(manager_role: Role, report_role: Role) -> bool:
    """A managerial role may directly manage any role of strictly lower rank."""
    return is_managerial(manager_role) and role_rank(manager_role) > role_rank(report_role)


class User(BaseModel):
    """A member of the sales organisation. Immutable for the session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    email: Optional[str] = None
    role: Role
    manager_id: Optional[str] = Field(default=None, alias="managerId")
    region: Optional[str] = None

    @field_validator("manager_id", mode="before")
    @classmethod
    def blank_manager_is_none(cls, v):
        """Treat empty strings as "no manager"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UserDirectory:
    """
    Validated, read-only collection of users with a reports-to index.

    Raises InvalidInputError on construction if the reports-to links do not
    form a forest. With ``enforce_role_order`` (the default) every manager must
    also outrank its direct reports.
    """

    def __init__(self, users: Iterable[User], enforce_role_order: bool = True):
        self.enforce_role_order = enforce_role_order
        self._users: Dict[str, User] = {}
        for user in users:
            if user.id in self._users:
                raise InvalidInputError(f"Duplicate user id in directory: {user.id}")
            self._users[user.id] = user

        self._reports: Dict[str, Tuple[str, ...]] = self._build_reports_index()
        self._check_acyclic()

    def _build_reports_index(self) -> Dict[str, Tuple[str, ...]]:
        reports: Dict[str, List[str]] = {}
        for user in self._users.values():
            if user.manager_id is None:
                continue
            manager = self._users.get(user.manager_id)
            if manager is None:
                raise InvalidInputError(
                    f"User {user.id} reports to unknown user {user.manager_id}"
                )
            if self.enforce_role_order and not can_manage(manager.role, user.role):
                raise InvalidInputError(
                    f"{manager.role.value} {manager.id} cannot manage "
                    f"{user.role.value} {user.id}"
                )
            reports.setdefault(manager.id, []).append(user.id)
        return {manager_id: tuple(ids) for manager_id, ids in reports.items()}

    def _check_acyclic(self):
        """Walk every reports-to chain; a chain that revisits a user is a cycle."""
        cleared: set = set()
        for start in self._users:
            path: List[str] = []
            on_path: set = set()
            current: Optional[str] = start
            while current is not None and current not in cleared:
                if current in on_path:
                    cycle = " -> ".join(path[path.index(current):] + [current])
                    raise InvalidInputError(f"Reports-to cycle detected: {cycle}")
                on_path.add(current)
                path.append(current)
                current = self._users[current].manager_id
            cleared.update(path)

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(self._users.values())

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def get(self, user_id: str) -> User:
        """Look up a user by id; raises NotFoundError if absent."""
        try:
            return self._users[user_id]
        except KeyError:
            raise NotFoundError(f"User {user_id} not found in directory") from None

    def direct_reports(self, user_id: str) -> Tuple[str, ...]:
        """Ids of users whose reports-to link targets ``user_id``."""
        return self._reports.get(user_id, ())

    def manager_of(self, user_id: str) -> Optional[User]:
        manager_id = self.get(user_id).manager_id
        return self._users[manager_id] if manager_id else None

    def roots(self) -> List[User]:
        """Users with no manager, i.e. the roots of the management forest."""
        return [u for u in self._users.values() if u.manager_id is None]

    def ids(self) -> FrozenSet[str]:
        return frozenset(self._users)
