"""Per-shop persistence services (settings, admin sessions)."""
