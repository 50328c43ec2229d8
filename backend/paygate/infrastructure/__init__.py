"""Infrastructure — database sessions, downstream HTTP clients, idempotency, logging."""
