"""Infrastructure adapters: persistence, cache, security, logging, jobs."""
