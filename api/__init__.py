"""Daily Planner HTTP API."""
