"""Runtime primitives shared by every stubgen command."""
