"""Move pull requests between the status columns of a GitHub project."""
