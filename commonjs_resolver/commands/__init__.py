"""CLI commands for commonjs-resolver."""

__all__ = [
    "core",
    "export",
    "resolve",
    "scan",
]
