"""Rating repository queries."""
