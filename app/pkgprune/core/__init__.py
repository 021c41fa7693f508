"""Core orchestration for pkgprune.

This package holds run configuration, settings, XDG paths, the action
executor and the clean/move workflows.
"""
