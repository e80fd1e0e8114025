"""Step 06: remove encoder side-channel files."""
