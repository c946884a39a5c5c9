"""Stub compilation: compiler seam, build host seam, driver, timestamp reset and pipeline."""
