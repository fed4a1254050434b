"""Reading and validating raw policy/claim records."""
