"""Remote plugin entry point; Neovim's python3 host loads this file."""

from time_tracking_nvim.plugin import TimeTrackingPlugin  # noqa: F401
