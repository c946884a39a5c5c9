"""Command line entrypoint for stubgen."""
