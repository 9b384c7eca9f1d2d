"""Read-only HTTP view API over the alert graph engine."""
