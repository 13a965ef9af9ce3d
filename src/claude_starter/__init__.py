"""claude-starter: tech stack detection and .claude/ configuration generator."""

__version__ = "0.4.0"
