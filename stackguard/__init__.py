"""StackGuard - stack-aware pre-commit security configuration generator."""

__version__ = "0.1.0"
