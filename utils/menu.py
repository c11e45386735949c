from __future__ import annotations

import logging
from typing import Iterable, Optional

import discord

log = logging.getLogger("pagebot")


class PaginatorError(Exception):
    pass


class ConfigurationError(PaginatorError, ValueError):
    pass


def as_ids(things: Iterable) -> frozenset[int]:
    """Normalize users/members/roles (or raw IDs) into a set of IDs."""
    return frozenset(t if isinstance(t, int) else t.id for t in things)


class Menu:
    """Who may drive a menu and for how long it waits between interactions.

    An empty user set *and* an empty role set means anyone may interact.
    """

    def __init__(self, waiter, users: Iterable = (), roles: Iterable = (), timeout: float = 60.0):
        self.waiter = waiter
        self.users = as_ids(users)
        self.roles = as_ids(roles)
        self.timeout = timeout

    def is_authorized(self, user_id: int, member: Optional[discord.Member] = None) -> bool:
        if not self.users and not self.roles:
            return True
        if user_id in self.users:
            return True
        if member is None or not self.roles:
            return False
        return any(r.id in self.roles for r in getattr(member, "roles", ()))

    def resolve_member(self, payload) -> Optional[discord.Member]:
        # raw_reaction_add only carries a member for guild messages
        member = getattr(payload, "member", None)
        if member is not None:
            return member
        guild_id = getattr(payload, "guild_id", None)
        if guild_id is None:
            return None
        bot = getattr(self.waiter, "bot", None)
        guild = bot.get_guild(guild_id) if bot is not None else None
        if guild is None:
            log.debug("guild %s not cached; cannot resolve roles for %s", guild_id, payload.user_id)
            return None
        return guild.get_member(payload.user_id)
