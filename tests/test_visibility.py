"""Tests for role-based visibility over the reports-to hierarchy."""

import pytest

from models.entities import Anchor, DailyActivity, Dealer, Task, Vendor
from models.permissions import (
    VisibilityScope,
    compute_visible_identities,
    filter_by_owner,
    has_subordinate_visibility,
)
from models.users import Role, User, UserDirectory
from sales_crm.errors import InvalidInputError, NotFoundError


class TestComputeVisibleIdentities:
    """Visibility sets for each kind of actor."""

    def test_admin_sees_all_descendants(self, directory):
        visible = compute_visible_identities("admin", directory)
        assert visible == frozenset({"admin", "rsm", "asm", "sales", "zsm", "asm-west", "bd"})

    def test_manager_sees_own_branch_only(self, directory):
        assert compute_visible_identities("rsm", directory) == frozenset({"rsm", "asm", "sales"})
        assert compute_visible_identities("zsm", directory) == frozenset({"zsm", "asm-west"})

    def test_individual_contributor_sees_only_self(self, directory):
        assert compute_visible_identities("sales", directory) == frozenset({"sales"})

    def test_manager_without_reports_sees_only_self(self, directory):
        assert compute_visible_identities("asm-west", directory) == frozenset({"asm-west"})

    def test_business_development_sees_only_self(self, directory):
        assert compute_visible_identities("bd", directory) == frozenset({"bd"})

    def test_three_level_chain(self):
        users = [
            User(id="A", name="Admin", role=Role.ADMIN),
            User(id="R", name="Regional", role=Role.REGIONAL_SALES_MANAGER, manager_id="A"),
            User(id="S", name="Seller", role=Role.SALES, manager_id="R"),
        ]
        assert compute_visible_identities("R", users) == frozenset({"R", "S"})
        assert compute_visible_identities("S", users) == frozenset({"S"})

    def test_accepts_user_object(self, directory, users):
        rsm = next(u for u in users if u.id == "rsm")
        assert compute_visible_identities(rsm, directory) == compute_visible_identities("rsm", directory)

    def test_role_comes_from_directory(self, directory):
        # A caller-side copy claiming Admin does not widen the scope
        impostor = User(id="sales", name="Neha Joshi", role=Role.ADMIN)
        assert compute_visible_identities(impostor, directory) == frozenset({"sales"})

    def test_is_idempotent(self, directory):
        first = compute_visible_identities("admin", directory)
        second = compute_visible_identities("admin", directory)
        assert first == second

    def test_actor_always_included(self, directory):
        for user in directory:
            assert user.id in compute_visible_identities(user.id, directory)

    def test_unknown_actor_raises(self, directory):
        with pytest.raises(NotFoundError):
            compute_visible_identities("ghost", directory)

    def test_plain_user_list_skips_role_order(self):
        # Peer managers are a valid forest even though ranks are equal
        users = [
            User(id="asm-lead", name="Lead ASM", role=Role.AREA_SALES_MANAGER),
            User(id="asm-peer", name="Peer ASM", role=Role.AREA_SALES_MANAGER, manager_id="asm-lead"),
        ]
        assert compute_visible_identities("asm-lead", users) == frozenset({"asm-lead", "asm-peer"})
        assert VisibilityScope.for_user("asm-peer", users).user_ids == frozenset({"asm-peer"})

    def test_plain_user_list_still_rejects_cycles(self):
        users = [
            User(id="a", name="A", role=Role.AREA_SALES_MANAGER, manager_id="b"),
            User(id="b", name="B", role=Role.AREA_SALES_MANAGER, manager_id="a"),
        ]
        with pytest.raises(InvalidInputError, match="cycle"):
            compute_visible_identities("a", users)

    def test_etb_manager_sees_etb_team(self):
        users = [
            User(id="etb-mgr", name="ETB Lead", role=Role.ETB_MANAGER),
            User(id="etb-1", name="ETB Member", role=Role.ETB_TEAM, manager_id="etb-mgr"),
        ]
        assert compute_visible_identities("etb-mgr", users) == frozenset({"etb-mgr", "etb-1"})

    def test_has_subordinate_visibility(self):
        assert has_subordinate_visibility(Role.ADMIN)
        assert has_subordinate_visibility(Role.AREA_SALES_MANAGER)
        assert not has_subordinate_visibility(Role.SALES)
        assert not has_subordinate_visibility(Role.BUSINESS_DEVELOPMENT)


class TestFilterByOwner:
    """Record filtering by owner id."""

    def test_filters_anchors_by_creator(self):
        anchors = [
            Anchor(id="a1", name="Reliance", industry="Conglomerate", created_by="asm"),
            Anchor(id="a2", name="Tata Steel", industry="Steel", created_by="asm-west"),
        ]
        visible = filter_by_owner(anchors, frozenset({"rsm", "asm", "sales"}))
        assert [a.id for a in visible] == ["a1"]

    def test_records_without_owner_are_excluded(self):
        anchors = [Anchor(id="a3", name="Unassigned", industry="Retail")]
        assert filter_by_owner(anchors, frozenset({"admin"})) == []

    def test_dict_records_need_owner_field(self):
        rows = [{"id": "x", "owner": "sales"}, {"id": "y", "owner": "zsm"}]
        assert filter_by_owner(rows, frozenset({"sales"}), owner_field="owner") == [rows[0]]
        with pytest.raises(ValueError, match="owner_field is required"):
            filter_by_owner(rows, frozenset({"sales"}))

    def test_preserves_order(self):
        tasks = [Task(id=f"t{i}", title="Call", assigned_to="sales") for i in range(3)]
        assert [t.id for t in filter_by_owner(tasks, frozenset({"sales"}))] == ["t0", "t1", "t2"]


class TestVisibilityScope:
    """The per-actor scope object and its entity helpers."""

    def test_for_user(self, directory):
        scope = VisibilityScope.for_user("asm", directory)
        assert scope.actor_id == "asm"
        assert scope.role == Role.AREA_SALES_MANAGER
        assert scope.user_ids == frozenset({"asm", "sales"})

    def test_can_view(self, directory):
        scope = VisibilityScope.for_user("asm", directory)
        assert scope.can_view("sales")
        assert not scope.can_view("rsm")
        assert not scope.can_view(None)

    def test_entity_helpers(self, directory):
        scope = VisibilityScope.for_user("rsm", directory)
        dealers = [Dealer(id="d1", name="Sharma Traders", assigned_to="sales"),
                   Dealer(id="d2", name="Patel Motors", assigned_to="zsm")]
        vendors = [Vendor(id="v1", name="Metal Works", assigned_to="asm")]
        tasks = [Task(id="t1", title="Follow up", assigned_to="asm-west")]
        activities = [DailyActivity(
            id="da1", user_id="sales", activity_type="Client Visit",
            title="Visited plant", activity_timestamp="2024-05-01T10:00:00Z",
        )]

        assert [d.id for d in scope.visible_spokes(dealers)] == ["d1"]
        assert [v.id for v in scope.visible_spokes(vendors)] == ["v1"]
        assert scope.visible_tasks(tasks) == []
        assert [a.id for a in scope.visible_daily_activities(activities)] == ["da1"]
        assert {u.id for u in scope.visible_users(directory)} == {"rsm", "asm", "sales"}

    def test_scope_is_frozen(self, directory):
        scope = VisibilityScope.for_user("sales", directory)
        with pytest.raises(Exception):
            scope.actor_id = "admin"

    def test_accepts_user_list(self, users):
        scope = VisibilityScope.for_user("zsm", users)
        assert scope.user_ids == frozenset({"zsm", "asm-west"})

    def test_unknown_actor(self, directory):
        with pytest.raises(NotFoundError):
            VisibilityScope.for_user("ghost", directory)


def test_directory_built_once_for_many_actors(users):
    directory = UserDirectory(users)
    sizes = {u.id: len(compute_visible_identities(u.id, directory)) for u in directory}
    assert sizes["admin"] == len(directory)
    assert sizes["sales"] == 1
