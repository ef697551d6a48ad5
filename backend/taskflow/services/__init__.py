"""Domain services for tasks, history, activity, and insights."""
