import logging, discord
print(f"Discord version: {discord.__version__}")

from config import GUILD_ID, IS_DEV, LOG_LEVEL, require
from utils.waiter import EventWaiter

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
log = logging.getLogger("pagebot")

intents = discord.Intents.default()
intents.guilds = True
intents.members = True
intents.reactions = True

bot = discord.Bot(intents=intents, debug_guilds=[GUILD_ID] if GUILD_ID else None)
bot.waiter = EventWaiter(bot)

# Load cogs
bot.load_extension("cogs.listing")

@bot.event
async def on_ready():
    await bot.change_presence(activity=discord.Game("(DEV) Pagebot" if IS_DEV else "Pagebot"))
    log.info("Logged in as %s (%s)", bot.user, bot.user.id)

bot.run(require("DISCORD_BOT_TOKEN"))
