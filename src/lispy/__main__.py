"""Run the Lispy CLI.

Usage:
    python -m lispy repl
    python -m lispy eval "(+ 1 2)"
"""

from lispy.cli.main import cli


if __name__ == "__main__":
    cli()
