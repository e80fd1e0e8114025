"""Step 05: two-pass video encode of a normalized frame sequence."""
