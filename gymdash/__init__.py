"""Daily booking metrics and recent activity for the gym dashboard."""
