"""Step 02: extract one archive into its working folder."""
