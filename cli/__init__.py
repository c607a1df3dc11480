"""Command line interface for splicedrum."""
