"""arc-updater - keep ArcDPS assemblies current and verified."""

__version__ = "0.1.0"
