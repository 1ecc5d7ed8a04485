"""Main CLI entry point.

This module defines the main CLI group and registers all commands.
"""
import click

from .commands import footprint, plan


@click.group()
@click.version_option(version="1.0.0", prog_name="uavpath")
def main():
    """UAV lawn-mower coverage path planning tool."""
    pass


main.add_command(footprint)
main.add_command(plan)


if __name__ == "__main__":
    main()
