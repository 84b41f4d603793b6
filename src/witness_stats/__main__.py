"""Entry point for running witness_stats as a module."""

from witness_stats.server import cli_entry

if __name__ == "__main__":
    cli_entry()
