"""Daily Planner command-line interface."""
