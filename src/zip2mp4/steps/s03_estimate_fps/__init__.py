"""Step 03: estimate the frame rate of a frame set."""
