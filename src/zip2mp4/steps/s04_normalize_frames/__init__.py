"""Step 04: rename frames into a zero-padded sequence."""
