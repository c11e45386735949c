from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

import discord

from utils.menu import ConfigurationError, Menu, as_ids

log = logging.getLogger("pagebot")

LEFT = "\N{BLACK LEFT-POINTING TRIANGLE}"
STOP = "\N{BLACK SQUARE FOR STOP}"
RIGHT = "\N{BLACK RIGHT-POINTING TRIANGLE}"
CONTROLS = (LEFT, STOP, RIGHT)

# Discord rejects empty field names and values
BLANK = "\u200b"
MAX_COLUMNS = 3


ColorFunc = Callable[[int, int], Union[discord.Color, int, None]]
TextFunc = Callable[[int, int], Optional[str]]


def _emoji_name(emoji) -> str:
    # clients may echo the glyph back with a variation selector
    return str(emoji).replace("\ufe0f", "")


@dataclass(frozen=True)
class RenderedPage:
    content: Optional[str]
    embed: discord.Embed

    def to_kwargs(self) -> dict:
        return {"content": self.content, "embed": self.embed}


class Paginator(Menu):
    """Reaction-driven paginated embed over a list of strings.

    Build one with :class:`PaginatorBuilder`; a built paginator is read-only and
    may back any number of concurrent sessions.
    """

    def __init__(
        self,
        waiter,
        users: Iterable,
        roles: Iterable,
        timeout: float,
        color: ColorFunc,
        text: Optional[TextFunc],
        columns: int,
        items_per_page: int,
        show_page_numbers: bool,
        number_items: bool,
        items: Iterable[str],
    ):
        super().__init__(waiter, users, roles, timeout)
        self.color = color
        self.text = text
        self.columns = columns
        self.items_per_page = items_per_page
        self.show_page_numbers = show_page_numbers
        self.number_items = number_items
        self.items = tuple(items)
        self.pages = max(1, math.ceil(len(self.items) / items_per_page))

    def clamp(self, page_num: int) -> int:
        return min(max(page_num, 1), self.pages)

    async def paginate(self, target: Union[discord.Message, discord.abc.Messageable], page_num: int = 1) -> "PaginatorSession":
        """Show ``page_num`` in ``target`` and run the session until it ends.

        ``target`` is either an existing message (edited in place) or a channel
        (a new message is sent). Failure of that first send/edit propagates.
        """
        page_num = self.clamp(page_num)
        page = self.render_page(page_num)
        if isinstance(target, (discord.Message, discord.PartialMessage)):
            await target.edit(**page.to_kwargs())
            message = target
        else:
            message = await target.send(**page.to_kwargs())

        session = PaginatorSession(self, message, page_num)
        await session.run()
        return session

    def _lines(self, start: int, end: int) -> str:
        return "\n".join(
            f"{i + 1}. {self.items[i]}" if self.number_items else self.items[i]
            for i in range(start, end)
        )

    def render_page(self, page_num: int) -> RenderedPage:
        """Render a page. ``page_num`` must already be within ``[1, pages]``."""
        start = (page_num - 1) * self.items_per_page
        end = min(len(self.items), page_num * self.items_per_page)

        embed = discord.Embed(colour=self.color(page_num, self.pages))
        if self.columns == 1:
            embed.description = self._lines(start, end) or None
        else:
            per = math.ceil((end - start) / self.columns)
            for k in range(self.columns):
                lo = min(end, start + k * per)
                hi = min(end, start + (k + 1) * per)
                embed.add_field(name=BLANK, value=self._lines(lo, hi) or BLANK, inline=True)

        if self.show_page_numbers:
            embed.set_footer(text=f"Page {page_num}/{self.pages}")
        content = self.text(page_num, self.pages) if self.text is not None else None
        return RenderedPage(content=content, embed=embed)


class PaginatorSession:
    """One live paginated message; navigable until :meth:`finish` runs."""

    def __init__(self, paginator: Paginator, message: discord.Message, page: int):
        self.paginator = paginator
        self.message = message
        self.page = page
        self.terminated = False

    async def attach_controls(self):
        # all controls go on before the first wait so no navigation races them
        controls = CONTROLS if self.paginator.pages > 1 else (STOP,)
        for emoji in controls:
            try:
                await self.message.add_reaction(emoji)
            except discord.HTTPException as e:
                log.warning("could not add %s to message %s: %s", emoji, self.message.id, e)

    def is_valid_reaction(self, payload) -> bool:
        if payload.message_id != self.message.id:
            return False
        if _emoji_name(payload.emoji) not in CONTROLS:
            return False
        bot = getattr(self.paginator.waiter, "bot", None)
        me = getattr(bot, "user", None)
        if me is not None and payload.user_id == me.id:
            return False
        if self.paginator.is_authorized(payload.user_id):
            return True
        return self.paginator.is_authorized(payload.user_id, self.paginator.resolve_member(payload))

    def next_page(self, emoji: str) -> int:
        if emoji == LEFT:
            return max(1, self.page - 1)
        if emoji == RIGHT:
            return min(self.paginator.pages, self.page + 1)
        return self.page

    async def run(self):
        """Attach the controls and handle reactions until stop, timeout or failure.

        The message is deleted on every way out, including errors raised by the
        colour/text functions and task cancellation (those still propagate).
        """
        try:
            await self.attach_controls()
            while True:
                try:
                    payload = await self.paginator.waiter.wait(
                        "raw_reaction_add", self.is_valid_reaction, self.paginator.timeout
                    )
                except asyncio.TimeoutError:
                    log.debug("paginator %s timed out on page %s", self.message.id, self.page)
                    return

                emoji = _emoji_name(payload.emoji)
                if emoji == STOP:
                    log.debug("paginator %s stopped by %s", self.message.id, payload.user_id)
                    return

                self.page = self.next_page(emoji)
                await self._remove_reaction(payload.emoji, payload.user_id)
                page = self.paginator.render_page(self.page)
                try:
                    await self.message.edit(**page.to_kwargs())
                except discord.HTTPException as e:
                    log.warning("failed to show page %s of message %s: %s", self.page, self.message.id, e)
                    return
        finally:
            await self.finish()

    async def _remove_reaction(self, emoji, user_id: int):
        try:
            await self.message.remove_reaction(emoji, discord.Object(id=user_id))
        except discord.HTTPException as e:
            log.warning("could not remove %s by %s on message %s: %s", emoji, user_id, self.message.id, e)

    async def finish(self):
        """Delete the message and stop listening. Safe to call more than once."""
        if self.terminated:
            return
        self.terminated = True
        try:
            await self.message.delete()
        except discord.NotFound:
            pass
        except discord.HTTPException as e:
            log.warning("could not delete paginator message %s: %s", self.message.id, e)


class PaginatorBuilder:
    def __init__(self):
        self._waiter = None
        self._users: set = set()
        self._roles: set = set()
        self._timeout = 60.0
        self._color: ColorFunc = lambda page, total: None
        self._text: Optional[TextFunc] = None
        self._columns = 1
        self._items_per_page = 12
        self._show_page_numbers = True
        self._number_items = False
        self._items: list[str] = []

    def set_event_waiter(self, waiter) -> "PaginatorBuilder":
        self._waiter = waiter
        return self

    def set_items(self, *items: str) -> "PaginatorBuilder":
        self._items = [str(i) for i in items]
        return self

    def add_items(self, *items: str) -> "PaginatorBuilder":
        self._items.extend(str(i) for i in items)
        return self

    def clear_items(self) -> "PaginatorBuilder":
        self._items = []
        return self

    def set_items_per_page(self, num: int) -> "PaginatorBuilder":
        self._items_per_page = num
        return self

    def set_columns(self, columns: int) -> "PaginatorBuilder":
        self._columns = columns
        return self

    def show_page_numbers(self, show: bool = True) -> "PaginatorBuilder":
        self._show_page_numbers = show
        return self

    def use_numbered_items(self, number: bool = True) -> "PaginatorBuilder":
        self._number_items = number
        return self

    def set_color(self, color) -> "PaginatorBuilder":
        """Either a ``(page, total) -> colour`` function or one fixed colour."""
        self._color = color if callable(color) else (lambda page, total: color)
        return self

    def set_text(self, text) -> "PaginatorBuilder":
        """Either a ``(page, total) -> str`` function or one fixed string."""
        if text is None or callable(text):
            self._text = text
        else:
            self._text = lambda page, total: text
        return self

    def set_users(self, *users) -> "PaginatorBuilder":
        self._users = set(as_ids(users))
        return self

    def add_users(self, *users) -> "PaginatorBuilder":
        self._users.update(as_ids(users))
        return self

    def set_roles(self, *roles) -> "PaginatorBuilder":
        self._roles = set(as_ids(roles))
        return self

    def add_roles(self, *roles) -> "PaginatorBuilder":
        self._roles.update(as_ids(roles))
        return self

    def set_timeout(self, seconds: float) -> "PaginatorBuilder":
        self._timeout = seconds
        return self

    def build(self) -> Paginator:
        if self._waiter is None:
            raise ConfigurationError("Must set an EventWaiter")
        if self._items_per_page < 1:
            raise ConfigurationError("items_per_page must be at least 1")
        if not 1 <= self._columns <= MAX_COLUMNS:
            raise ConfigurationError(f"Only 1 to {MAX_COLUMNS} columns are supported")
        if self._columns > self._items_per_page:
            raise ConfigurationError("columns cannot exceed items_per_page")
        if self._timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        return Paginator(
            waiter=self._waiter,
            users=self._users,
            roles=self._roles,
            timeout=self._timeout,
            color=self._color,
            text=self._text,
            columns=self._columns,
            items_per_page=self._items_per_page,
            show_page_numbers=self._show_page_numbers,
            number_items=self._number_items,
            items=self._items,
        )
