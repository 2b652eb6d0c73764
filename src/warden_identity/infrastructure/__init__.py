"""Infrastructure adapters: persistence and email delivery."""
