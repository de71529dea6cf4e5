"""Session manager for tmux and Zellij."""
__version__ = "0.1.0"
