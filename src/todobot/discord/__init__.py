"""Discord integration for the todo bot.

The bot runs in-process with FastAPI, sharing the same event loop. Slash
commands and button clicks are reduced to InboundEvents and handed to the
InteractionRouter; responses come back as embeds.

Optional: if DISCORD_BOT_TOKEN is not set, the app runs without Discord.
"""
