"""Path resolution, subprocess execution and the per-subcommand tool handlers."""
