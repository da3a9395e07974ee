"""pda command-line interface."""
