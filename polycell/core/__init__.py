"""Implementation modules of polycell; import public names from ``polycell``."""
