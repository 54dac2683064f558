"""Team Todo: a Discord bot for per-team todo lists shared inside a guild."""
