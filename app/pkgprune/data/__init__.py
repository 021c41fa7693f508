"""Bundled data files for pkgprune."""
