from __future__ import annotations

from typing import Dict, Iterable, Optional

from domain.models.member import Member


class MemberRepository:
    """In-memory member directory keyed by id, with case-insensitive email lookup."""

    def __init__(self, members: Iterable[Member] = ()) -> None:
        self._members: Dict[str, Member] = {}
        for member in members:
            self.create(member)

    def create(self, member: Member) -> str:
        self._members[member.id] = member
        return member.id

    def get_by_id(self, member_id: str) -> Optional[Member]:
        return self._members.get(member_id)

    def get_by_email(self, email: str) -> Optional[Member]:
        needle = (email or "").strip().lower()
        if not needle:
            return None
        for member in self._members.values():
            if str(member.email).lower() == needle:
                return member
        return None

    def count(self) -> int:
        return len(self._members)
