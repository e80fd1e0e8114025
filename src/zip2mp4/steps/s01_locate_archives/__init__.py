"""Step 01: locate ZIP archives in the selected folder."""
