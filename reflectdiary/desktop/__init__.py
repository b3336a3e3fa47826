"""Desktop launcher for the diary."""
