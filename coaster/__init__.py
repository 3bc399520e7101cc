# Roller coaster ride simulation: track curve, physics stepping, geometry checks

__version__ = "0.1.0"
