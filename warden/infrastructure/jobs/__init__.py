"""Background jobs (purge schedule)."""
