"""Core scan orchestration, state and configuration."""
