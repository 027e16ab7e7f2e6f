"""Persistence helpers for groups (the group directory)."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from classroom.domain.entities import Group
from classroom.infrastructure.database import persistence_errors
from classroom.infrastructure.models import GroupModel, UserModel, group_membership_table
from classroom.utils import ensure_app_naive_datetime, ensure_app_timezone


class GroupRepository:
    """Provide CRUD and membership operations for :class:`Group` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> Sequence[Group]:
        with persistence_errors(self.session, "list groups"):
            counts = dict(self._member_counts())
            models = self.session.query(GroupModel).order_by(GroupModel.name.asc()).all()
            return [self._to_entity(model, counts.get(model.id, 0)) for model in models]

    def get(self, group_id: int) -> Group | None:
        with persistence_errors(self.session, f"load group {group_id}"):
            model = self.session.get(GroupModel, group_id)
            if model is None:
                return None
            return self._to_entity(model, self._count_members(group_id))

    def exists(self, group_id: int) -> bool:
        return self.get(group_id) is not None

    def create(self, group: Group) -> Group:
        model = GroupModel(
            name=group.name,
            description=group.description,
            discord_link=group.discord_link,
            hash13_link=group.hash13_link,
            created_by=group.created_by,
        )
        if group.created_at is not None:
            model.created_at = ensure_app_naive_datetime(group.created_at)
        with persistence_errors(self.session, "store the group"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model, 0)

    def update(self, group: Group) -> Group:
        model = self.session.get(GroupModel, group.id)
        if model is None:
            msg = f"Group with id {group.id} not found"
            raise ValueError(msg)
        with persistence_errors(self.session, f"update group {group.id}"):
            model.name = group.name
            model.description = group.description
            model.discord_link = group.discord_link
            model.hash13_link = group.hash13_link
            if group.updated_at is not None:
                model.updated_at = ensure_app_naive_datetime(group.updated_at)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model, self._count_members(group.id))

    def delete(self, group_id: int) -> None:
        model = self.session.get(GroupModel, group_id)
        if model is None:
            msg = f"Group with id {group_id} not found"
            raise ValueError(msg)
        with persistence_errors(self.session, f"delete group {group_id}"):
            self.session.execute(
                group_membership_table.delete().where(
                    group_membership_table.c.group_id == group_id
                )
            )
            self.session.delete(model)
            self.session.commit()

    def add_member(self, group_id: int, user_id: int) -> None:
        group = self.session.get(GroupModel, group_id)
        user = self.session.get(UserModel, user_id)
        if group is None or user is None:
            msg = "Group or user not found"
            raise ValueError(msg)
        if group not in user.groups:
            with persistence_errors(self.session, f"add user {user_id} to group {group_id}"):
                user.groups.append(group)
                self.session.add(user)
                self.session.commit()

    def remove_member(self, group_id: int, user_id: int) -> None:
        user = self.session.get(UserModel, user_id)
        if user is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        remaining = [group for group in user.groups if group.id != group_id]
        if len(remaining) != len(user.groups):
            with persistence_errors(self.session, f"remove user {user_id} from group {group_id}"):
                user.groups = remaining
                self.session.add(user)
                self.session.commit()

    def list_member_ids(self, group_id: int) -> list[int]:
        with persistence_errors(self.session, f"list members of group {group_id}"):
            rows = self.session.execute(
                select(group_membership_table.c.user_id)
                .where(group_membership_table.c.group_id == group_id)
                .order_by(group_membership_table.c.user_id)
            )
            return [user_id for (user_id,) in rows]

    def _member_counts(self):
        return self.session.execute(
            select(group_membership_table.c.group_id, func.count()).group_by(
                group_membership_table.c.group_id
            )
        ).all()

    def _count_members(self, group_id: int) -> int:
        return self.session.execute(
            select(func.count())
            .select_from(group_membership_table)
            .where(group_membership_table.c.group_id == group_id)
        ).scalar_one()

    @staticmethod
    def _to_entity(model: GroupModel, member_count: int) -> Group:
        return Group(
            id=model.id,
            name=model.name,
            description=model.description,
            created_by=model.created_by,
            discord_link=model.discord_link,
            hash13_link=model.hash13_link,
            member_count=member_count,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["GroupRepository"]
