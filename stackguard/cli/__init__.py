"""CLI module for StackGuard."""
