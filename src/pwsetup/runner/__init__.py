"""Setup runner — the orchestration behind ``pwsetup install`` and ``pwsetup action``."""
