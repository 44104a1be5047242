"""
Exposure-and-telemetry routing engine.

Turns experiment assignments, remote-config values and feature flags into
exposure records and routes them to the reporting sinks configured per
project and per scene.
"""

__version__ = "0.1.0"
