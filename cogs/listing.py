import logging
from typing import Annotated

import discord
from discord.ext import commands
from discord.commands import slash_command, Option

from config import GUILD_IDS, IS_DEV, ITEMS_PER_PAGE, PAGINATOR_ROLE_IDS, PAGINATOR_TIMEOUT
from utils.menu import ConfigurationError
from utils.paginator import PaginatorBuilder

log = logging.getLogger("pagebot")


def member_line(member) -> str:
    if member.display_name != member.name:
        return f"{member.display_name} ({member.name})"
    return member.name


def role_line(role) -> str:
    return f"{role.name} · {len(role.members)} members"


class Listing(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    def _builder(self, ctx: discord.ApplicationContext, title: str, columns: int) -> PaginatorBuilder:
        return (
            PaginatorBuilder()
            .set_event_waiter(self.bot.waiter)
            .set_items_per_page(ITEMS_PER_PAGE)
            .set_columns(columns)
            .use_numbered_items()
            .show_page_numbers()
            .set_text(f"**{title}**")
            .set_color(0xFF0000 if IS_DEV else 0x00FF00)
            .set_users(ctx.author)
            .set_roles(*PAGINATOR_ROLE_IDS)
            .set_timeout(PAGINATOR_TIMEOUT)
        )

    async def _run(self, ctx: discord.ApplicationContext, builder: PaginatorBuilder, page: int):
        try:
            paginator = builder.build()
        except ConfigurationError as e:
            await ctx.respond(f"❌ {e}", ephemeral=True)
            return
        await ctx.respond(f"Showing {len(paginator.items)} entries.", ephemeral=True)
        try:
            await paginator.paginate(ctx.channel, page)
        except discord.HTTPException as e:
            log.warning("paginator in channel %s failed to start: %s", ctx.channel.id, e)

    @slash_command(guild_ids=GUILD_IDS, name="listmembers", description="Browse the members of this server.")
    @discord.guild_only()
    async def list_members(
        self,
        ctx: discord.ApplicationContext,
        page: Annotated[int, Option(int, "Page to start on", default=1)],
        columns: Annotated[int, Option(int, "Columns (1-3)", choices=[1, 2, 3], default=1)],
    ):
        members = sorted(ctx.guild.members, key=lambda m: m.display_name.lower())
        builder = self._builder(ctx, f"Members of {ctx.guild.name}", columns)
        builder.set_items(*(member_line(m) for m in members))
        await self._run(ctx, builder, page)

    @slash_command(guild_ids=GUILD_IDS, name="listroles", description="Browse the roles of this server.")
    @discord.guild_only()
    async def list_roles(
        self,
        ctx: discord.ApplicationContext,
        page: Annotated[int, Option(int, "Page to start on", default=1)],
        columns: Annotated[int, Option(int, "Columns (1-3)", choices=[1, 2, 3], default=1)],
    ):
        # highest role first, @everyone last
        roles = sorted(ctx.guild.roles, key=lambda r: r.position, reverse=True)
        builder = self._builder(ctx, f"Roles of {ctx.guild.name}", columns)
        builder.set_items(*(role_line(r) for r in roles))
        await self._run(ctx, builder, page)


def setup(bot):
    bot.add_cog(Listing(bot))
