"""
Role-based visibility for CRM data access.

Computes which users' records an acting user may see, following the
reports-to hierarchy, and filters entity collections to that scope.
"""

import logging
from collections import deque
from typing import Any, FrozenSet, Iterable, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from .entities import ActivityLog, Anchor, CRMModel, DailyActivity, Spoke, Task
from .users import ROLE_HIERARCHY, Role, User, UserDirectory


logger = logging.getLogger(__name__)

R = TypeVar("R")


def _as_directory(all_users: Union[UserDirectory, Iterable[User]]) -> UserDirectory:
    """Wrap a plain user list; only structural checks apply, not role order."""
    if isinstance(all_users, UserDirectory):
        return all_users
    return UserDirectory(all_users, enforce_role_order=False)


def has_subordinate_visibility(role: Role) -> bool:
    """Managerial tiers see their reporting line; contributors and onboarding roles do not."""
    info = ROLE_HIERARCHY[role]
    return info.managerial and not info.onboarding


def compute_visible_identities(
    actor: Union[User, str],
    all_users: Union[UserDirectory, Iterable[User]],
) -> FrozenSet[str]:
    """
    Return the ids of users whose records ``actor`` may view.

    The actor always sees itself. Managerial roles also see every user that
    reaches them through one or more reports-to links.

    Raises:
        NotFoundError: if the actor is not in the directory
        InvalidInputError: if ``all_users`` has duplicate ids, unknown
            managers or a reports-to cycle
    """
    directory = _as_directory(all_users)
    actor_id = actor.id if isinstance(actor, User) else actor
    # Role comes from the directory, not from the caller's copy of the user
    acting_user = directory.get(actor_id)

    visible = {acting_user.id}
    if not has_subordinate_visibility(acting_user.role):
        return frozenset(visible)

    queue = deque([acting_user.id])
    while queue:
        manager_id = queue.popleft()
        for report_id in directory.direct_reports(manager_id):
            if report_id not in visible:
                visible.add(report_id)
                queue.append(report_id)

    logger.debug(
        "Resolved visibility set",
        extra={"actor_id": acting_user.id, "role": acting_user.role.value, "visible_count": len(visible)},
    )
    return frozenset(visible)


def filter_by_owner(
    records: Iterable[R],
    visible_ids: FrozenSet[str],
    owner_field: Optional[str] = None,
) -> List[R]:
    """
    Return the records whose owner is in ``visible_ids``.

    CRM models know their owner field; plain objects and dicts need
    ``owner_field``. Records without an owner are excluded.
    """
    result = []
    for record in records:
        owner = _owner_of(record, owner_field)
        if owner is not None and owner in visible_ids:
            result.append(record)
    return result


def _owner_of(record: Any, owner_field: Optional[str]) -> Optional[str]:
    if owner_field is None:
        if isinstance(record, CRMModel):
            return record.owner_id()
        raise ValueError("owner_field is required for records that are not CRM models")
    if isinstance(record, dict):
        return record.get(owner_field)
    return getattr(record, owner_field, None)


class VisibilityScope(BaseModel):
    """Visibility set for one acting user, with typed entity filters."""

    model_config = ConfigDict(frozen=True)

    actor_id: str
    role: Role
    user_ids: FrozenSet[str]

    @classmethod
    def for_user(
        cls,
        actor: Union[User, str],
        all_users: Union[UserDirectory, Iterable[User]],
    ) -> "VisibilityScope":
        directory = _as_directory(all_users)
        actor_id = actor.id if isinstance(actor, User) else actor
        user_ids = compute_visible_identities(actor_id, directory)
        return cls(actor_id=actor_id, role=directory.get(actor_id).role, user_ids=user_ids)

    def can_view(self, owner_id: Optional[str]) -> bool:
        return owner_id is not None and owner_id in self.user_ids

    def filter(self, records: Iterable[R], owner_field: Optional[str] = None) -> List[R]:
        return filter_by_owner(records, self.user_ids, owner_field)

    def visible_users(self, users: Iterable[User]) -> List[User]:
        return [u for u in users if u.id in self.user_ids]

    def visible_anchors(self, anchors: Iterable[Anchor]) -> List[Anchor]:
        return self.filter(anchors)

    def visible_spokes(self, spokes: Iterable[Spoke]) -> List[Spoke]:
        return self.filter(spokes)

    def visible_tasks(self, tasks: Iterable[Task]) -> List[Task]:
        return self.filter(tasks)

    def visible_activity_logs(self, logs: Iterable[ActivityLog]) -> List[ActivityLog]:
        return self.filter(logs)

    def visible_daily_activities(self, activities: Iterable[DailyActivity]) -> List[DailyActivity]:
        return self.filter(activities)
