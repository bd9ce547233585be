"""pwsetup command-line interface."""
