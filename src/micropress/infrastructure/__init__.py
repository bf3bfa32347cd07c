"""Infrastructure layer — path resolution, filesystem, site wiring.

Pure parsing and rendering live in :mod:`micropress.domain`; this layer
performs the actual file I/O and owns configuration-derived paths.
"""
