"""Desktop preview for playing transitions (requires pygame)."""
