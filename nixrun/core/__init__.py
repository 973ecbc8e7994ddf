"""
Core infrastructure for nixrun.

Contains models, interfaces, exceptions, configuration and the service container.
"""
